import numpy as np
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from gui.chart3d import Chart3D, figure_pixel_range
from gui.projection import build_projection


@pytest.fixture
def fig():
    f = Figure(figsize=(4, 3), dpi=100)
    FigureCanvasAgg(f)
    return f


def _chart(fig, pitch=1.1, yaw=0.6):
    chart = Chart3D(fig, (-1.5, 1.5), (-1.5, 1.5), (-1.5, 1.5), 0.1)
    chart.with_projection(build_projection(figure_pixel_range(fig), pitch, yaw))
    return chart


def test_pixel_range_follows_figure(fig):
    assert figure_pixel_range(fig) == ((0, 400), (0, 300))


def test_axes_span_the_figure_in_pixels(fig):
    chart = _chart(fig)
    assert chart.ax.get_xlim() == (0, 400)
    assert chart.ax.get_ylim() == (300, 0)


def test_map_3d_fills_the_logical_cube(fig):
    chart = _chart(fig)
    size = chart.view.size
    mapped = chart.map_3d([[-1.5, -1.5, -1.5], [1.5, 1.5, 1.5], [0, 0, 0]])
    assert np.allclose(mapped, [[0, 0, 0], [size, size, size], [size / 2] * 3])


def test_cube_centre_projects_to_viewport_centre(fig):
    chart = _chart(fig, pitch=0.8, yaw=-0.4)
    # size is 240 here, so the logical centre is exactly v=120
    assert np.allclose(chart.project([[0, 0, 0]]), [[200, 150]])


def test_requires_projection(fig):
    chart = Chart3D(fig, (-1, 1), (-1, 1), (-1, 1), 0.5)
    with pytest.raises(RuntimeError):
        chart.project([[0, 0, 0]])
    with pytest.raises(RuntimeError):
        chart.configure_axes()


def test_rejects_bad_ranges(fig):
    with pytest.raises(ValueError):
        Chart3D(fig, (1, 1), (-1, 1), (-1, 1), 0.1)
    with pytest.raises(ValueError):
        Chart3D(fig, (-1, 1), (-1, 1), (-1, 1), 0.0)


def test_configure_axes_draws_panels_and_grid(fig):
    chart = _chart(fig)
    chart.configure_axes()
    # face fill, light grid, bold grid, frame
    assert len(chart.ax.collections) == 4
    light, bold = chart.ax.collections[1], chart.ax.collections[2]
    # 31 gridlines per axis, two directions per panel, three panels
    assert len(light.get_segments()) + len(bold.get_segments()) == 31 * 2 * 3
    assert len(chart.ax.collections[3].get_segments()) == 12
    assert len(chart.ax.texts) == 7 * 3


def test_series_and_legend(fig):
    chart = _chart(fig)
    chart.draw_polygons([[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]], (0, 0, 0, 0.2), label="QUAD")
    chart.draw_points(np.zeros((5, 3)), (1, 0, 0, 0.3), 2.0, label="PTS", legend_color=(1, 0, 0, 0.5))
    chart.draw_points(np.zeros((0, 3)), (1, 0, 0, 0.8), 2.0)
    assert chart.legend_labels == ["QUAD", "PTS"]
    leg = chart.configure_series_labels(border_color="black")
    assert [t.get_text() for t in leg.get_texts()] == ["QUAD", "PTS"]
    assert tuple(leg.get_frame().get_edgecolor()) == (0.0, 0.0, 0.0, 1.0)


def test_no_legend_without_labels(fig):
    chart = _chart(fig)
    chart.draw_points(np.zeros((2, 3)), (0, 0, 1, 1.0), 2.0)
    assert chart.configure_series_labels() is None


def test_text_size_is_in_pixels(fig):
    chart = _chart(fig)
    txt = chart.draw_text("x", (1.5, -1.5, -1.5), (1, 0, 0), 20)
    assert txt.get_fontsize() == pytest.approx(20 * 72 / 100)
    assert txt.get_text() == "x"
