# codec/geometry.py
# Fixed geometry of the rotating-mirror display: angle grid, facet plane,
# and the three LED panels standing around the rotation axis.

import math
from typing import NamedTuple

import numpy as np

# Discrete mirror positions per full revolution
TOTAL_ANGLES = 128

# Display space puts the reconstructed volume below the facet hub
VOLUME_Z_OFFSET = 2.0

# Vertical extent shared by every panel
SCREEN_Z = (-1.0, 1.0)

# Panels are the sides of an equilateral triangle around the axis
SCREEN_INRADIUS = 1.0

# Largest radius a reflected voxel reaches; sizes the default sweep band
SWEEP_RADIUS = 2.5


class Segment(NamedTuple):
    """Footprint of one panel on the ground plane, from `a` to `b`."""
    a: tuple
    b: tuple

    def points(self):
        return self.a, self.b


def angle_to_radians(angle) -> float:
    return 2.0 * math.pi * float(angle) / TOTAL_ANGLES


def default_sweep_tolerance() -> float:
    """Half the arc a reflected point travels between two mirror steps."""
    return 0.5 * SWEEP_RADIUS * angle_to_radians(1)


def _triangle_segments(inradius):
    circumradius = 2.0 * inradius
    corners = [
        (circumradius * math.cos(math.radians(deg)), circumradius * math.sin(math.radians(deg)))
        for deg in (90.0, 210.0, 330.0)
    ]
    return tuple(Segment(corners[i], corners[(i + 1) % 3]) for i in range(3))


_SCREENS = _triangle_segments(SCREEN_INRADIUS)


def screens():
    return _SCREENS


def facet_normal(theta: float) -> np.ndarray:
    """Unit normal of the 45° facet after rotating it by `theta` about z."""
    return np.array([math.cos(theta), math.sin(theta), 1.0]) / math.sqrt(2.0)


def reflect(points, normal) -> np.ndarray:
    """Mirror (N, 3) points through the facet plane (which contains the origin)."""
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    normal = np.asarray(normal, dtype=float)
    return points - 2.0 * (points @ normal)[:, None] * normal[None, :]
