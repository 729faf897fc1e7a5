# headless/render_frames.py
# Render VDRM frames to PNG without a window.
#
#   python -m headless.render_frames --out frames --angle 0 --angle 32
#   python -m headless.render_frames --all-angles --pitch 1.1 --yaw 0.6

import argparse
import os
import sys
import time

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

import config
from codec.geometry import TOTAL_ANGLES
from gui.controls import default_camera, validate_angle
from gui.renderer import DrawError, draw
from scene.context import init_ctx
from utils.debug import log_debug, set_debug_level


def _angle_arg(value):
    try:
        return validate_angle(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _size_arg(value):
    try:
        w, h = (int(v) for v in str(value).lower().split("x", 1))
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like 800x600, got {value!r}") from None
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {value!r}")
    return w, h


def _dpi_arg(value):
    try:
        dpi = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"dpi must be an integer, got {value!r}") from None
    if dpi <= 0:
        raise argparse.ArgumentTypeError(f"dpi must be positive, got {value!r}")
    return dpi


def parse_args(argv=None):
    pitch, yaw = default_camera()
    parser = argparse.ArgumentParser(description="Headless VDRM frame exporter")
    parser.add_argument("--out", default=config.EXPORT_DIR, help="Output directory")
    parser.add_argument("--angle", type=_angle_arg, action="append", default=None,
                        help=f"Mirror angle to render (0..{TOTAL_ANGLES - 1}); repeatable")
    parser.add_argument("--all-angles", action="store_true",
                        help="Render every angle plus the aggregate view")
    parser.add_argument("--pitch", type=float, default=pitch, help="Camera pitch (radians)")
    parser.add_argument("--yaw", type=float, default=yaw, help="Camera yaw (radians)")
    parser.add_argument("--size", type=_size_arg, default=config.EXPORT_SIZE, help="WxH in pixels")
    parser.add_argument("--dpi", type=_dpi_arg, default=config.EXPORT_DPI)
    parser.add_argument("--debug", choices=["FULL", "MINIMAL"], default="MINIMAL")
    return parser.parse_args(argv)


def frame_plan(args):
    """Angles to render, in order. None stands for the all-angles view."""
    if args.all_angles:
        return [None] + list(range(TOTAL_ANGLES))
    if args.angle:
        return list(args.angle)
    return [None]


def frame_filename(angle):
    return "frame_all.png" if angle is None else f"frame_{angle:03d}.png"


def render_frame(angle, path, pitch, yaw, size, dpi):
    w, h = size
    fig = Figure(figsize=(w / dpi, h / dpi), dpi=dpi)
    canvas = FigureCanvasAgg(fig)
    info = draw(fig, angle=angle, pitch=pitch, yaw=yaw)
    canvas.print_png(path)
    return info


def main(argv=None):
    args = parse_args(argv)
    set_debug_level(args.debug)

    init_ctx()
    os.makedirs(args.out, exist_ok=True)

    plan = frame_plan(args)
    print(f"🎞 Rendering {len(plan)} frame(s) to {args.out}")
    t0 = time.time()

    for i, angle in enumerate(plan):
        path = os.path.join(args.out, frame_filename(angle))
        try:
            info = render_frame(angle, path, args.pitch, args.yaw, args.size, args.dpi)
        except DrawError as e:
            log_debug(f"❌ Frame {angle if angle is not None else 'all'} failed: {e}", level="MINIMAL")
            return 1
        log_debug(f"[{i + 1}/{len(plan)}] 💾 {path} (emu={info['emu']} led={info['led']})")

    log_debug(f"✅ Export finished in {time.time() - t0:.1f}s", level="MINIMAL")
    return 0


if __name__ == "__main__":
    sys.exit(main())
