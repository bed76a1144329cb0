"""
Blur Pipeline
Reads a P3 image, smooths it with the 5x5 Gaussian kernel and writes the
result as a new P3 file. Each stage finishes before the next one starts.
"""

import logging
from pathlib import Path
from typing import Union

from ..models.image import Image
from ..services.image_service import ImageService
from ..services.blur_service import BlurService

logger = logging.getLogger(__name__)


def blur_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    image_service: ImageService = None,
    blur_service: BlurService = None,
) -> Image:
    """
    Args:
        input_path: P3 file to read
        output_path: destination P3 file; only created once blurring succeeded
        image_service: Service for image I/O (built from the environment if None)
        blur_service: Service for the convolution (built if None)

    Returns:
        Image: the blurred image, with path set to output_path
    """
    # Services read their settings here, not at import time.
    image_service = image_service or ImageService()
    blur_service = blur_service or BlurService()

    src = image_service.load(input_path)

    blurred = blur_service.blur(src)
    del src  # input buffer is no longer needed
    width, height = image_service.get_image_dimensions(blurred)
    logger.info(f"Blurred {width}x{height} image")

    image_service.save(blurred, output_path)
    return blurred
