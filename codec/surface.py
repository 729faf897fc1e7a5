# codec/surface.py
# Height-field volumes as the codec consumes them.

from typing import List, NamedTuple

import numpy as np

GRID_SIZE = 64


class Voxel(NamedTuple):
    x: int
    y: int
    z: int
    color: int


PixelSurface = List[Voxel]


def surface_to_points(surface, size: int = GRID_SIZE) -> np.ndarray:
    """
    Convert voxels to (N, 3) floats. x and y map onto [-1, 1), height onto
    multiples of the half grid (a full-height column reaches 1.0).
    """
    if len(surface) == 0:
        return np.empty((0, 3), dtype=float)
    half = size / 2.0
    raw = np.asarray([(v.x, v.y, v.z) for v in surface], dtype=float)
    points = raw / half
    points[:, 0] -= 1.0
    points[:, 1] -= 1.0
    return points


def surface_colors(surface) -> np.ndarray:
    return np.asarray([v.color for v in surface], dtype=np.uint8)
