# gui/renderer.py
# One frame of the VDRM scene: axes, panels, ground truth, and either every
# angle superimposed or a single mirror pose with its reflections.

from contextlib import contextmanager

from matplotlib.figure import Figure

from config import AXIS_RANGE, AXIS_STEP, BACKGROUND, LABEL_FONT_PX, POINT_SIZE, TICK_EVERY
from gui.chart3d import Chart3D, figure_pixel_range
from gui.projection import build_projection
from scene.context import get_ctx

RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
BLACK = (0.0, 0.0, 0.0)


def mix(rgb, alpha):
    return (rgb[0], rgb[1], rgb[2], alpha)


class DrawError(Exception):
    """A drawing step failed; the frame was abandoned where it stopped."""


@contextmanager
def _backend(step):
    try:
        yield
    except Exception as exc:
        raise DrawError(f"{step} failed: {exc}") from exc


def _figure_of(canvas):
    fig = canvas if isinstance(canvas, Figure) else getattr(canvas, "figure", None)
    if not isinstance(fig, Figure):
        raise TypeError(f"cannot draw on {type(canvas).__name__}: no matplotlib Figure")
    return fig


def draw(canvas, angle=None, pitch=0.0, yaw=0.0, ctx=None):
    """
    Render one frame onto `canvas` (a Figure, or a Tk/Agg canvas holding one).
    `angle` None shows all angles; otherwise it must be a key of the context.
    Returns a dict of what was drawn. Raises DrawError on backend failure.
    """
    fig = _figure_of(canvas)
    ctx = ctx if ctx is not None else get_ctx()
    lim = AXIS_RANGE

    with _backend("fill"):
        fig.clear()
        fig.set_facecolor(BACKGROUND)

    with _backend("build chart"):
        chart = Chart3D(fig, (-lim, lim), (-lim, lim), (-lim, lim), AXIS_STEP, tick_every=TICK_EVERY)
        chart.with_projection(build_projection(figure_pixel_range(fig), pitch, yaw))
        chart.configure_axes()

    with _backend("axis labels"):
        for label, position, color in (
            ("x", (lim, -lim, -lim), RED),
            ("y", (-lim, lim, -lim), GREEN),
            ("z", (-lim, -lim, lim), BLUE),
        ):
            chart.draw_text(label, position, color, LABEL_FONT_PX)

    with _backend("screens"):
        chart.draw_polygons([s.polygon() for s in ctx.screens], mix(BLACK, 0.8),
                            label="SCREEN", legend_color=mix(BLACK, 0.9))

    with _backend("real surface"):
        chart.draw_points(ctx.all_real, mix(BLUE, 0.2), POINT_SIZE,
                          label="REAL", legend_color=mix(BLUE, 0.5))

    if angle is None:
        emu, led = ctx.all_emu, ctx.all_led
    else:
        # Unknown angles are a caller bug: let the KeyError through
        angle_ctx = ctx.angle(angle)
        with _backend("mirror"):
            chart.draw_polygons([angle_ctx.mirror.polygon()], mix(BLACK, 0.2),
                                label="MIRROR", legend_color=mix(BLACK, 0.5))
        emu, led = angle_ctx.emu_points, angle_ctx.led_points

    with _backend("emulator points"):
        chart.draw_points(emu, mix(RED, 0.3), POINT_SIZE,
                          label="EMULATOR", legend_color=mix(RED, 0.5))

    with _backend("led points"):
        chart.draw_points(led, mix(RED, 0.8), POINT_SIZE)

    with _backend("legend"):
        chart.configure_series_labels(border_color=BLACK)

    return {
        "angle": angle,
        "real": int(len(ctx.all_real)),
        "emu": int(len(emu)),
        "led": int(len(led)),
        "legend": chart.legend_labels,
    }
