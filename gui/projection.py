# gui/projection.py
# Oblique camera for the 3D chart, rebuilt on every draw from pitch/yaw and
# the current viewport.
#
# Points are first mapped into a logical cube of `size` pixels per side (see
# gui/chart3d.py), then pushed through the steps below, in order:
#   recenter → rotate-yaw → rotate-pitch → scale → reposition
# Only x/y of the result are used (orthographic); z is kept as depth.

import math
from typing import NamedTuple

import numpy as np

from config import VIEW_SCALE

# Rotations smaller than this are skipped (same picture, one matmul less)
ROTATION_EPS = 1e-20


class ProjectionMatrix:
    """Immutable 4x4 homogeneous transform acting on column vectors."""

    __slots__ = ("m",)

    def __init__(self, m=None):
        m = np.eye(4) if m is None else np.array(m, dtype=float)
        if m.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got {m.shape}")
        m.setflags(write=False)
        self.m = m

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def shift(cls, x, y, z):
        m = np.eye(4)
        m[:3, 3] = (x, y, z)
        return cls(m)

    @classmethod
    def scale(cls, s):
        return cls(np.diag([s, s, s, 1.0]))

    @classmethod
    def rotate(cls, x=0.0, y=0.0, z=0.0):
        """Rotate about x, then y, then z (radians)."""
        cx, sx = math.cos(x), math.sin(x)
        cy, sy = math.cos(y), math.sin(y)
        cz, sz = math.cos(z), math.sin(z)
        rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
        ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
        rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
        m = np.eye(4)
        m[:3, :3] = rz @ ry @ rx
        return cls(m)

    def then(self, other):
        """Apply self first, then `other`."""
        return ProjectionMatrix(other.m @ self.m)

    def transform(self, points) -> np.ndarray:
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        homo = np.column_stack([pts, np.ones(len(pts))])
        return (homo @ self.m.T)[:, :3]

    def project(self, points) -> np.ndarray:
        return self.transform(points)[:, :2]

    def __eq__(self, other):
        return isinstance(other, ProjectionMatrix) and np.allclose(self.m, other.m)

    def __repr__(self):
        return f"ProjectionMatrix({self.m.tolist()!r})"


class ViewTransform(NamedTuple):
    matrix: ProjectionMatrix
    steps: tuple    # names of the steps actually applied, in order
    size: int       # side of the logical cube the chart maps data into


def logical_size(pixel_range) -> int:
    """Cube side: 80% of the shorter viewport edge."""
    (x0, x1), (y0, y1) = pixel_range
    return int(min(x1 - x0, y1 - y0)) * 4 // 5


def build_projection(pixel_range, pitch, yaw, scale=VIEW_SCALE) -> ViewTransform:
    """
    pixel_range: ((x0, x1), (y0, y1)) viewport in pixels.
    pitch, yaw: camera rotation in radians.
    """
    (x0, x1), (y0, y1) = pixel_range
    size = logical_size(pixel_range)
    v = size // 2
    center = ((x0 + x1) // 2, (y0 + y1) // 2)

    steps = []
    if (v, v, v) == (0, 0, 0):
        mat = ProjectionMatrix.identity()
    else:
        mat = ProjectionMatrix.shift(-v, -v, -v)
        steps.append("recenter")

    if abs(yaw) > ROTATION_EPS:
        mat = mat.then(ProjectionMatrix.rotate(0.0, 0.0, yaw))
        steps.append("rotate-yaw")
    if abs(pitch) > ROTATION_EPS:
        mat = mat.then(ProjectionMatrix.rotate(pitch, 0.0, 0.0))
        steps.append("rotate-pitch")

    mat = mat.then(ProjectionMatrix.scale(scale))
    steps.append("scale")

    if center != (0, 0):
        mat = mat.then(ProjectionMatrix.shift(center[0], center[1], 0.0))
        steps.append("reposition")

    return ViewTransform(mat, tuple(steps), size)
