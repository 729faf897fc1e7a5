# codec/codec.py
# Encode a height-field volume into what each LED panel must show at every
# mirror angle, and decode panel content back into display-space points.
#
# Model: the facet is a plane through the origin with normal
# (cos θ, sin θ, 1)/√2. A voxel is shown at angle θ on panel s when its mirror
# image lies on that panel (within the sweep tolerance). Decoding reflects the
# panel position back: the exact position gives the emulator cloud, the
# position snapped to the LED matrix gives the LED cloud.

from dataclasses import dataclass

import numpy as np

import config
from codec.geometry import (
    SCREEN_Z,
    TOTAL_ANGLES,
    VOLUME_Z_OFFSET,
    angle_to_radians,
    default_sweep_tolerance,
    facet_normal,
    reflect,
    screens,
)
from codec.surface import surface_colors, surface_to_points


@dataclass(frozen=True)
class PanelFrame:
    """Panel content for one mirror angle (parallel arrays, one row per lit voxel)."""
    base_angle: int
    screen: np.ndarray   # panel index
    u: np.ndarray        # position along the panel segment, 0..1
    h: np.ndarray        # height on the panel, SCREEN_Z range
    color: np.ndarray    # 3-bit color code

    def __len__(self):
        return int(self.screen.size)


def _empty_points():
    return np.empty((0, 3), dtype=float)


class Codec:
    def __init__(self, led_columns=None, led_rows=None, sweep_tolerance=None):
        self.led_columns = int(led_columns if led_columns is not None else config.LED_COLUMNS)
        self.led_rows = int(led_rows if led_rows is not None else config.LED_ROWS)
        if sweep_tolerance is None:
            sweep_tolerance = config.SWEEP_TOLERANCE
        if sweep_tolerance is None:
            sweep_tolerance = default_sweep_tolerance()
        self.sweep_tolerance = float(sweep_tolerance)

        if self.led_columns <= 0 or self.led_rows <= 0:
            raise ValueError(f"LED matrix must be positive, got {self.led_columns}x{self.led_rows}")
        if self.sweep_tolerance <= 0:
            raise ValueError(f"sweep_tolerance must be > 0, got {self.sweep_tolerance}")

        segs = screens()
        self._seg_a = np.asarray([s.a for s in segs], dtype=float)
        self._seg_b = np.asarray([s.b for s in segs], dtype=float)

    # ------------------------------------------------------------------ encode

    def encode(self, surface, base_angle=0):
        """
        Returns {angle: PanelFrame} for every angle at which at least one voxel
        lands on a panel. Angles with nothing to show are absent.
        """
        base_angle = int(base_angle) % TOTAL_ANGLES
        points = surface_to_points(surface)
        if points.shape[0] == 0:
            return {}
        points[:, 2] -= VOLUME_Z_OFFSET
        colors = surface_colors(surface)

        frames = {}
        for angle in range(TOTAL_ANGLES):
            normal = facet_normal(self._pose_radians(angle, base_angle))
            image = reflect(points, normal)

            parts = []
            for idx in range(len(self._seg_a)):
                mask, u = self._landing(image, idx)
                if mask.any():
                    parts.append((np.full(int(mask.sum()), idx, dtype=np.int8),
                                  u[mask], image[mask, 2], colors[mask]))
            if not parts:
                continue

            frames[angle] = PanelFrame(
                base_angle=base_angle,
                screen=np.concatenate([p[0] for p in parts]),
                u=np.concatenate([p[1] for p in parts]),
                h=np.concatenate([p[2] for p in parts]),
                color=np.concatenate([p[3] for p in parts]),
            )
        return frames

    def _landing(self, image, idx):
        a = self._seg_a[idx]
        d = self._seg_b[idx] - a
        length = float(np.hypot(d[0], d[1]))
        t = d / length
        m = np.array([-t[1], t[0]])

        rel = image[:, :2] - a
        dist = rel @ m
        u = (rel @ t) / length
        h = image[:, 2]
        mask = (
            (np.abs(dist) <= self.sweep_tolerance)
            & (u >= 0.0) & (u <= 1.0)
            & (h >= SCREEN_Z[0]) & (h <= SCREEN_Z[1])
        )
        return mask, u

    # ------------------------------------------------------------------ decode

    def decode(self, angle, frame):
        """Returns (emu_points, led_points), each an (N, 3) float array."""
        if not 0 <= int(angle) < TOTAL_ANGLES:
            raise ValueError(f"angle {angle} outside 0..{TOTAL_ANGLES - 1}")
        if len(frame) == 0:
            return _empty_points(), _empty_points()

        normal = facet_normal(self._pose_radians(int(angle), frame.base_angle))
        screen = np.asarray(frame.screen, dtype=int)
        emu = reflect(self._panel_points(screen, frame.u, frame.h), normal)

        cols, rows = self._led_cells(frame.u, frame.h)
        cells = np.stack([screen, cols, rows], axis=1)
        _, first = np.unique(cells, axis=0, return_index=True)
        first.sort()

        z0, z1 = SCREEN_Z
        led_u = (cols[first] + 0.5) / self.led_columns
        led_h = z0 + (rows[first] + 0.5) * (z1 - z0) / self.led_rows
        led = reflect(self._panel_points(screen[first], led_u, led_h), normal)
        return emu, led

    def _led_cells(self, u, h):
        z0, z1 = SCREEN_Z
        cols = np.clip(np.floor(np.asarray(u) * self.led_columns), 0, self.led_columns - 1).astype(int)
        rows = np.floor((np.asarray(h) - z0) / (z1 - z0) * self.led_rows)
        rows = np.clip(rows, 0, self.led_rows - 1).astype(int)
        return cols, rows

    def _panel_points(self, screen, u, h):
        a = self._seg_a[screen]
        b = self._seg_b[screen]
        xy = a + np.asarray(u, dtype=float)[:, None] * (b - a)
        return np.column_stack([xy, np.asarray(h, dtype=float)])

    @staticmethod
    def _pose_radians(angle, base_angle):
        return angle_to_radians((angle - base_angle) % TOTAL_ANGLES)
