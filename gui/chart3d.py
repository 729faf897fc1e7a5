# gui/chart3d.py
# Minimal 3D chart drawn on a flat matplotlib Axes whose data units are
# pixels. The camera comes from gui/projection.py; this module only maps data
# into the logical cube, projects, and emits 2D artists.
#
# Pixel convention: origin top-left, y grows downward.

import numpy as np
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib.patches import Patch

from gui.projection import ViewTransform

PANEL_FACE = (0.0, 0.0, 0.0, 0.03)
GRID_LIGHT = (0.0, 0.0, 0.0, 0.06)
GRID_BOLD = (0.0, 0.0, 0.0, 0.25)
FRAME_EDGE = (0.0, 0.0, 0.0, 0.8)
TICK_COLOR = "#333333"


def figure_pixel_range(fig):
    w = int(round(fig.bbox.width))
    h = int(round(fig.bbox.height))
    return (0, w), (0, h)


class Chart3D:
    def __init__(self, fig, x_range, y_range, z_range, step, tick_every=5):
        self.fig = fig
        self.ranges = (tuple(x_range), tuple(y_range), tuple(z_range))
        for lo, hi in self.ranges:
            if not hi > lo:
                raise ValueError(f"empty axis range ({lo}, {hi})")
        if step <= 0:
            raise ValueError(f"step must be > 0, got {step}")
        self.step = float(step)
        self.tick_every = max(1, int(tick_every))
        self.pixel_range = figure_pixel_range(fig)
        self.view = None
        self._legend = []

        (px0, px1), (py0, py1) = self.pixel_range
        ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
        ax.set_xlim(px0, px1)
        ax.set_ylim(py1, py0)
        ax.set_axis_off()
        self.ax = ax

    # ------------------------------------------------------------ camera

    def with_projection(self, view: ViewTransform):
        self.view = view

    def _require_view(self):
        if self.view is None:
            raise RuntimeError("no projection installed; call with_projection() first")
        return self.view

    def map_3d(self, points) -> np.ndarray:
        """Data coordinates → logical cube [0, size]^3."""
        size = self._require_view().size
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        lo = np.array([r[0] for r in self.ranges])
        hi = np.array([r[1] for r in self.ranges])
        return (pts - lo) / (hi - lo) * size

    def project(self, points) -> np.ndarray:
        return self._require_view().matrix.project(self.map_3d(points))

    def depth(self, points) -> np.ndarray:
        return self._require_view().matrix.transform(self.map_3d(points))[:, 2]

    # ------------------------------------------------------------ axes

    def _grid_values(self, k):
        lo, hi = self.ranges[k]
        n = int(np.floor((hi - lo) / self.step + 1e-9))
        return lo + self.step * np.arange(n + 1)

    def _back_side(self, k):
        """Bound of axis k whose face is farther from the viewer (larger depth)."""
        center = np.array([(lo + hi) / 2.0 for lo, hi in self.ranges])
        faces = []
        for bound in self.ranges[k]:
            c = center.copy()
            c[k] = bound
            faces.append(c)
        d = self.depth(np.array(faces))
        return self.ranges[k][1] if d[1] > d[0] else self.ranges[k][0]

    def configure_axes(self):
        """Back panels with gridlines, their frame, and tick labels."""
        self._require_view()
        back = [self._back_side(k) for k in range(3)]

        faces, light, bold, edges = [], [], [], []
        for k in range(3):
            a, b = [i for i in range(3) if i != k]
            (alo, ahi), (blo, bhi) = self.ranges[a], self.ranges[b]

            corners = []
            for av, bv in ((alo, blo), (ahi, blo), (ahi, bhi), (alo, bhi)):
                p = [0.0, 0.0, 0.0]
                p[k], p[a], p[b] = back[k], av, bv
                corners.append(p)
            corners = np.array(corners)
            faces.append(self.project(corners))
            for i in range(4):
                edges.append(self.project(corners[[i, (i + 1) % 4]]))

            for axis, other, (olo, ohi) in ((a, b, (blo, bhi)), (b, a, (alo, ahi))):
                for j, val in enumerate(self._grid_values(axis)):
                    seg = np.zeros((2, 3))
                    seg[:, k] = back[k]
                    seg[:, axis] = val
                    seg[:, other] = (olo, ohi)
                    (bold if j % self.tick_every == 0 else light).append(self.project(seg))

        self.ax.add_collection(PolyCollection(faces, facecolors=PANEL_FACE, edgecolors="none"))
        self.ax.add_collection(LineCollection(light, colors=GRID_LIGHT, linewidths=0.5))
        self.ax.add_collection(LineCollection(bold, colors=GRID_BOLD, linewidths=0.8))
        self.ax.add_collection(LineCollection(edges, colors=FRAME_EDGE, linewidths=1.0))
        self._draw_ticks(back)

    def _draw_ticks(self, back):
        # Labels run along the front edge of the floor panel (and a side edge for z)
        front = [self.ranges[k][0] if back[k] == self.ranges[k][1] else self.ranges[k][1]
                 for k in range(3)]
        for k in range(3):
            for j, val in enumerate(self._grid_values(k)):
                if j % self.tick_every:
                    continue
                p = [0.0, 0.0, 0.0]
                p[k] = val
                if k == 2:
                    p[0], p[1] = front[0], back[1]
                else:
                    other = 1 - k
                    p[other], p[2] = front[other], back[2]
                (px, py), = self.project([p])
                self.ax.text(px, py, f"{val:.1f}", color=TICK_COLOR, fontsize=7,
                             ha="center", va="center")

    # ------------------------------------------------------------ series

    def _add_legend(self, label, legend_color):
        if label:
            self._legend.append(Patch(facecolor=legend_color, edgecolor="none", label=label))

    def draw_polygons(self, polygons, color, label=None, legend_color=None):
        projected = [self.project(np.asarray(poly, dtype=float)) for poly in polygons]
        coll = PolyCollection(projected, facecolors=[color], edgecolors="none")
        self.ax.add_collection(coll)
        self._add_legend(label, legend_color or color)
        return coll

    def draw_points(self, points, color, size, label=None, legend_color=None):
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        xy = self.project(pts) if len(pts) else np.empty((0, 2))
        coll = self.ax.scatter(xy[:, 0], xy[:, 1], s=size, color=color, linewidths=0)
        self._add_legend(label, legend_color or color)
        return coll

    def draw_text(self, text, position, color, size_px):
        (px, py), = self.project([position])
        fontsize = size_px * 72.0 / self.fig.dpi
        return self.ax.text(px, py, text, color=color, fontsize=fontsize,
                            family="sans-serif", ha="left", va="bottom")

    def configure_series_labels(self, border_color="black"):
        """Bordered legend box for every labelled series."""
        if not self._legend:
            return None
        leg = self.ax.legend(handles=self._legend, loc="upper left", frameon=True,
                             fancybox=False, framealpha=1.0, edgecolor=border_color)
        return leg

    @property
    def legend_labels(self):
        return [h.get_label() for h in self._legend]
