from pathlib import Path
from typing import Tuple, Union
import logging

import numpy as np

from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O helpers.  No filtering logic."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(
        self,
        width: int,
        height: int,
        max_value: int,
        channels: np.ndarray,
        path: Union[str, Path] = None,
    ) -> Image:
        return self.image_repository.create_image(width, height, max_value, channels, path)

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single P3 image from disk into an Image object."""
        img = self.image_repository.load(path)
        logger.info(f"Loaded {img.width}x{img.height} image (max value {img.max_value}) from {img.path}")
        return img

    def save(self, img: Image, path: Union[str, Path] = None) -> Path:
        """
        Business-level method to write the image as P3, to *path* or img.path.
        """
        saved_path = self.image_repository.save(img, path)
        logger.info(f"Saved {img.width}x{img.height} image to {saved_path}")
        return saved_path

    def get_image_dimensions(self, img: Image) -> Tuple[int, int]:
        """(width, height) of the image."""
        return self.image_repository.retrieve_image_dimensions(img)
