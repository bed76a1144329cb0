from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..models.image import Image
from ..models.errors import (
    ConfigError,
    ImageIOError,
    ImageTooLargeError,
    InvalidDimensionsError,
    InvalidMaxValueError,
    PixelOutOfRangeError,
    TruncatedHeaderError,
    UnexpectedEndOfDataError,
    UnsupportedFormatError,
)
from .token_reader import TokenReader

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

FORMAT_TAG = b"P3"
MAX_VALUE_LIMIT = 65535
MAX_SAMPLES = 200_000_000  # memory guard on width*height*3, not a format limit


class ImageRepository:
    """
    Handles P3 decoding/encoding and file I/O for Image entities.
    """
    def __init__(self):
        raw = os.getenv("PPM_VALUES_PER_LINE", "15")
        try:
            self.values_per_line = int(raw)
        except ValueError:
            self.values_per_line = 0
        if self.values_per_line < 1:
            raise ConfigError(f"PPM_VALUES_PER_LINE must be a positive integer, got {raw!r}")

    @staticmethod
    def create_image(
        width: int,
        height: int,
        max_value: int,
        channels: np.ndarray,
        path: Union[str, Path] = None,
    ) -> Image:
        channels = np.asarray(channels, dtype=np.int64).reshape(-1)
        if channels.size != width * height * 3:
            raise ValueError(
                f"Channel buffer holds {channels.size} values, expected {width * height * 3}"
            )
        return Image(width, height, max_value, channels, Path(path) if path is not None else None)

    @staticmethod
    def retrieve_image_dimensions(img: Image) -> Tuple[int, int]:
        return img.width, img.height

    # ─── Decoding ──────────────────────────────────────────────────────
    @staticmethod
    def parse_header(reader: TokenReader) -> Tuple[int, int, int]:
        """
        Reads the P3 tag, width, height and max value, validating each.

        Returns:
            (width, height, max_value)
        """
        tag = reader.read_tag(len(FORMAT_TAG))
        if tag is None:
            raise TruncatedHeaderError("Could not read PPM header")
        if tag != FORMAT_TAG:
            raise UnsupportedFormatError(f"Only P3 PPM format is supported (got {tag!r})")

        width = reader.read_int()
        height = reader.read_int() if width is not None else None
        max_value = reader.read_int() if height is not None else None
        if max_value is None:
            raise TruncatedHeaderError("Missing width/height/maxval")

        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Width and height must be positive (got {width}x{height})")
        if not 1 <= max_value <= MAX_VALUE_LIMIT:
            raise InvalidMaxValueError(f"Max color value must be 1..{MAX_VALUE_LIMIT} (got {max_value})")

        n_values = width * height * 3
        if n_values <= 0 or n_values > MAX_SAMPLES:
            raise ImageTooLargeError(f"Image too large ({width}x{height}, {n_values} values)")

        return width, height, max_value

    @staticmethod
    def load_channels(reader: TokenReader, width: int, height: int, max_value: int) -> np.ndarray:
        """
        Reads exactly width*height*3 values in row-major, RGB-interleaved order.
        """
        n_values = width * height * 3
        channels = np.empty(n_values, dtype=np.int64)
        for i in range(n_values):
            value = reader.read_int()
            if value is None:
                raise UnexpectedEndOfDataError(
                    f"Unexpected EOF in pixel data (read {i} of {n_values} values)"
                )
            if value < 0 or value > max_value:
                raise PixelOutOfRangeError(
                    f"Pixel value out of range: {value} at value {i} (max {max_value})"
                )
            channels[i] = value
        return channels

    def parse(self, data: bytes, path: Union[str, Path] = None) -> Image:
        return self._decode(TokenReader(data), path)

    def _decode(self, reader: TokenReader, path: Union[str, Path] = None) -> Image:
        width, height, max_value = self.parse_header(reader)
        logger.debug(f"Header: {width}x{height}, max value {max_value}")
        channels = self.load_channels(reader, width, height, max_value)
        return self.create_image(width, height, max_value, channels, path)

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        try:
            fp = open(path, "rb")
        except OSError as err:
            raise ImageIOError(f"Could not open input file: {err.strerror or err}") from err
        with fp:
            try:
                reader = TokenReader.from_stream(fp)
            except OSError as err:
                raise ImageIOError(f"Could not read input file: {err.strerror or err}") from err
        return self._decode(reader, path)

    # ─── Encoding ──────────────────────────────────────────────────────
    def serialize(self, image: Image) -> bytes:
        """
        Canonical layout: header on three lines, then values wrapped at
        values_per_line per line. An incomplete last line keeps the
        separator space before its newline.
        """
        per_line = self.values_per_line
        values = image.channels.tolist()
        lines = [f"P3\n{image.width} {image.height}\n{image.max_value}\n"]
        for start in range(0, len(values), per_line):
            chunk = values[start:start + per_line]
            line = " ".join(map(str, chunk))
            lines.append(line + ("\n" if len(chunk) == per_line else " \n"))
        return "".join(lines).encode("ascii")

    def save(self, image: Image, path: Union[str, Path] = None) -> Path:
        path = Path(path) if path is not None else image.path
        if path is None:
            raise ValueError("No output path given and image has no path")
        payload = self.serialize(image)
        try:
            fp = open(path, "wb")
        except OSError as err:
            raise ImageIOError(f"Could not open output file: {err.strerror or err}") from err
        try:
            with fp:
                fp.write(payload)
        except OSError as err:
            raise ImageIOError(f"Could not write output file: {err.strerror or err}") from err
        image.path = path
        return path
