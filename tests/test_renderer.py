import numpy as np
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

import gui.renderer as renderer
from codec.geometry import TOTAL_ANGLES
from gui.chart3d import Chart3D
from gui.renderer import DrawError, draw


@pytest.fixture
def fig():
    f = Figure(figsize=(4, 4), dpi=100)
    FigureCanvasAgg(f)
    return f


def _alpha(coll):
    return float(coll.get_facecolor()[0][3])


def test_all_angles_frame(fig, fake_ctx):
    info = draw(fig, angle=None, pitch=1.1, yaw=0.6, ctx=fake_ctx)
    assert info["angle"] is None
    assert info["emu"] == len(fake_ctx.all_emu) == 9
    assert info["led"] == len(fake_ctx.all_led) == 5
    assert info["real"] == len(fake_ctx.all_real)
    assert info["legend"] == ["SCREEN", "REAL", "EMULATOR"]


def test_single_angle_frame_adds_mirror(fig, fake_ctx):
    info = draw(fig, angle=5, pitch=0.3, yaw=-0.2, ctx=fake_ctx)
    assert info["legend"] == ["SCREEN", "REAL", "MIRROR", "EMULATOR"]
    assert info["emu"] == 4
    assert info["led"] == 1


def test_selected_angle_never_exceeds_aggregate(fig, fake_ctx):
    everything = draw(fig, angle=None, ctx=fake_ctx)
    for angle in range(TOTAL_ANGLES):
        one = draw(fig, angle=angle, ctx=fake_ctx)
        assert one["emu"] <= everything["emu"]
        assert one["led"] <= everything["led"]


def test_empty_angle_still_draws(fig, fake_ctx):
    info = draw(fig, angle=1, ctx=fake_ctx)
    assert info["emu"] == 0
    assert info["led"] == 0
    assert "MIRROR" in info["legend"]


def test_led_drawn_last_and_more_opaque_than_emulator(fig, fake_ctx):
    draw(fig, angle=None, ctx=fake_ctx)
    ax = fig.axes[0]
    led, emu = ax.collections[-1], ax.collections[-2]
    assert _alpha(led) == pytest.approx(0.8)
    assert _alpha(emu) == pytest.approx(0.3)
    assert len(led.get_offsets()) == 5
    assert len(emu.get_offsets()) == 9


def test_axis_glyphs_and_legend_box(fig, fake_ctx):
    draw(fig, angle=None, ctx=fake_ctx)
    ax = fig.axes[0]
    glyphs = [t for t in ax.texts if t.get_text() in ("x", "y", "z")]
    assert [t.get_text() for t in glyphs] == ["x", "y", "z"]
    legend = ax.get_legend()
    assert legend is not None
    assert tuple(legend.get_frame().get_edgecolor()) == (0.0, 0.0, 0.0, 1.0)


def test_redraw_replaces_previous_frame(fig, fake_ctx):
    draw(fig, angle=None, ctx=fake_ctx)
    draw(fig, angle=0, ctx=fake_ctx)
    assert len(fig.axes) == 1


def test_canvas_objects_are_accepted(fig, fake_ctx):
    canvas = fig.canvas
    info = draw(canvas, angle=0, ctx=fake_ctx)
    assert info["emu"] == 3
    canvas.draw()


def test_unknown_angle_is_fatal_not_a_draw_error(fig, fake_ctx):
    with pytest.raises(KeyError):
        draw(fig, angle=TOTAL_ANGLES, ctx=fake_ctx)


def test_missing_figure_is_fatal(fake_ctx):
    with pytest.raises(TypeError):
        draw(object(), ctx=fake_ctx)


def test_backend_failure_surfaces_one_draw_error(fig, fake_ctx, monkeypatch):
    calls = []

    def broken(self, *args, **kwargs):
        calls.append(kwargs.get("label"))
        raise RuntimeError("backend exploded")

    monkeypatch.setattr(Chart3D, "draw_points", broken)
    with pytest.raises(DrawError) as excinfo:
        draw(fig, angle=None, ctx=fake_ctx)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "real surface" in str(excinfo.value)
    # aborted at the first point series
    assert calls == ["REAL"]
    assert fig.axes[0].get_legend() is None


def test_fill_failure_is_a_draw_error(fig, fake_ctx, monkeypatch):
    def broken_clear(*args, **kwargs):
        raise RuntimeError("cannot clear")

    monkeypatch.setattr(fig, "clear", broken_clear)
    with pytest.raises(DrawError, match="fill"):
        draw(fig, ctx=fake_ctx)


def test_uses_shared_context_by_default(fig, fake_ctx, monkeypatch):
    monkeypatch.setattr(renderer, "get_ctx", lambda: fake_ctx)
    info = draw(fig)
    assert info["emu"] == 9


def test_real_context_renders(fig):
    info = draw(fig, angle=None, pitch=1.1, yaw=0.6)
    assert info["emu"] > 0
    assert info["led"] <= info["emu"]
    fig.canvas.draw()
    assert np.asarray(fig.canvas.buffer_rgba()).shape == (400, 400, 4)


@pytest.mark.parametrize("angle", [True, 5.0])
def test_non_int_angle_is_fatal(fig, fake_ctx, angle):
    with pytest.raises(KeyError):
        draw(fig, angle=angle, ctx=fake_ctx)
