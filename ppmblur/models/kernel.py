"""
Fixed 5x5 Gaussian smoothing kernel.

Rows are indexed by dy, columns by dx, both shifted by RADIUS so that
offset (0, 0) sits at WEIGHTS[2, 2].
"""
import numpy as np

RADIUS = 2

WEIGHTS = np.array(
    [
        [1, 2, 3, 2, 1],
        [2, 4, 6, 4, 2],
        [3, 6, 9, 6, 3],
        [2, 4, 6, 4, 2],
        [1, 2, 3, 2, 1],
    ],
    dtype=np.int64,
)
WEIGHTS.setflags(write=False)

DIVISOR = int(WEIGHTS.sum())  # 81


def weight(dx: int, dy: int) -> int:
    if not (-RADIUS <= dx <= RADIUS and -RADIUS <= dy <= RADIUS):
        raise ValueError(f"Kernel offset out of range: ({dx}, {dy})")
    return int(WEIGHTS[dy + RADIUS, dx + RADIUS])


def offsets():
    """Yield (dx, dy, weight) for every kernel cell, row by row."""
    for dy in range(-RADIUS, RADIUS + 1):
        for dx in range(-RADIUS, RADIUS + 1):
            yield dx, dy, int(WEIGHTS[dy + RADIUS, dx + RADIUS])
