# scene/primitives.py
# Quads of the moving facet and of the fixed panels, in display space.

import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from codec.geometry import SCREEN_Z, angle_to_radians, screens

MIRROR_LENGTH = 1.0 / math.sqrt(2.0)


class Point3(NamedTuple):
    x: float
    y: float
    z: float


def _base_corners(length):
    # Alternating z tilts the facet 45° against the rotation axis
    return (
        (length, length, -length),
        (-length, length, length),
        (-length, -length, length),
        (length, -length, -length),
    )


@dataclass(frozen=True)
class Mirror:
    """Facet pose at one discrete angle."""
    length: float
    angle: int
    points: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        theta = angle_to_radians(self.angle)
        rot = np.array([[math.cos(theta), -math.sin(theta)],
                        [math.sin(theta), math.cos(theta)]])
        corners = []
        for x, y, z in _base_corners(self.length):
            px, py = rot @ np.array([x, y])
            corners.append(Point3(float(px), float(py), float(z)))
        object.__setattr__(self, "points", tuple(corners))

    def polygon(self):
        return self.points


@dataclass(frozen=True)
class Screen:
    """One fixed LED panel: its ground segment extruded over SCREEN_Z."""
    index: int
    points: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        a, b = screens()[self.index].points()
        z0, z1 = SCREEN_Z
        object.__setattr__(self, "points", (
            Point3(float(a[0]), float(a[1]), z0),
            Point3(float(a[0]), float(a[1]), z1),
            Point3(float(b[0]), float(b[1]), z1),
            Point3(float(b[0]), float(b[1]), z0),
        ))

    def polygon(self):
        return self.points
