from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: P3 header values + flat channel buffer.
    No parsing or filtering logic in this file.
    """
    width: int
    height: int
    max_value: int
    channels: np.ndarray # Shape (H*W*3,), dtype int64, RGB interleaved, row-major.
    path: Path | None = None # Source or destination of the image.

    def index(self, x: int, y: int, c: int) -> int:
        """Flat buffer offset of channel *c* of pixel (x, y)."""
        return (y * self.width + x) * 3 + c

    def grid(self) -> np.ndarray:
        """(H, W, 3) view over the same buffer."""
        return self.channels.reshape(self.height, self.width, 3)
