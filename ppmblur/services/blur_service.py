import logging

import numpy as np

from ..models import kernel
from ..models.image import Image
from .image_service import ImageService

logger = logging.getLogger(__name__)


class BlurService:
    """
    Business-level helper for the fixed 5x5 Gaussian blur.

    • Samples outside the image repeat the nearest edge pixel.
    • Integer arithmetic throughout; results round half up, then clamp.
    • Returns a **new** Image (no path yet); the input is never modified.
    """

    def __init__(self):
        self.image_service = ImageService()

    @staticmethod
    def _clamp(v: int, lo: int, hi: int) -> int:
        return lo if v < lo else hi if v > hi else v

    @staticmethod
    def _normalise(acc, max_value: int):
        return np.clip((acc + kernel.DIVISOR // 2) // kernel.DIVISOR, 0, max_value)

    def blur_pixels(self, img: Image) -> np.ndarray:
        """
        Direct 2-D weighted sum over an edge-padded copy of the image.

        Returns:
            np.ndarray: flat int64 buffer, same layout as img.channels.
        """
        r = kernel.RADIUS
        grid = img.grid().astype(np.int64, copy=False)
        # mode="edge" pads by repeating border pixels: clamp-to-edge sampling.
        padded = np.pad(grid, ((r, r), (r, r), (0, 0)), mode="edge")

        acc = np.zeros_like(grid, dtype=np.int64)
        for dx, dy, w in kernel.offsets():
            acc += w * padded[r + dy:r + dy + img.height, r + dx:r + dx + img.width, :]

        return self._normalise(acc, img.max_value).reshape(-1)

    def blur_at(self, img: Image, x: int, y: int, c: int) -> int:
        """Blurred value of channel *c* at (x, y), computed element by element."""
        acc = 0
        for dx, dy, w in kernel.offsets():
            sx = self._clamp(x + dx, 0, img.width - 1)
            sy = self._clamp(y + dy, 0, img.height - 1)
            acc += w * int(img.channels[img.index(sx, sy, c)])
        return int(self._normalise(acc, img.max_value))

    def blur(self, img: Image) -> Image:
        logger.debug(f"Blurring {img.width}x{img.height} image with {kernel.WEIGHTS.shape} kernel")
        new_channels = self.blur_pixels(img)
        return self.image_service.create_image(img.width, img.height, img.max_value, new_channels)
