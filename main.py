#main.py

import matplotlib
# Must be set BEFORE importing pyplot or any module that imports pyplot.
matplotlib.use("TkAgg")

import sys
import argparse
import tkinter as tk
from tkinter import ttk

import app.app_state as app_state
import config
from build_version import version_info
from codec.geometry import TOTAL_ANGLES
from gui.controls import validate_angle
from scene.context import init_ctx
from utils.debug import attach_debug_widget, start_debug_updater, log_debug, set_debug_level

# NOTE: GUI modules are imported lazily inside build_tabs() so Tk exists first.

# ----------------------------------------------------------------------------
# CLI
# ----------------------------------------------------------------------------

def _angle_arg(value):
    try:
        return validate_angle(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rotating-mirror volumetric display viewer")
    parser.add_argument("--version", action="store_true", help="Show version number")
    parser.add_argument("--angle", type=_angle_arg, default=None,
                        help=f"Start on one mirror angle (0..{TOTAL_ANGLES - 1}); default shows all")
    parser.add_argument("--pitch", type=float, default=None, help="Initial camera pitch (radians)")
    parser.add_argument("--yaw", type=float, default=None, help="Initial camera yaw (radians)")
    parser.add_argument("--debug", choices=["FULL", "MINIMAL"], default="FULL")
    return parser.parse_args(argv)


# ----------------------------------------------------------------------------
# GUI wiring helpers
# ----------------------------------------------------------------------------

def build_root(info):
    root = tk.Tk()
    root.title(f"{info['APP_NAME']} {info['VERSION']} [{info['GIT_COMMIT']}]")
    root.tk.call("tk", "scaling", config.TK_SCALING)
    root.geometry(config.WINDOW_GEOMETRY)
    root.minsize(*config.WINDOW_MINSIZE)
    if config.WINDOW_START_MAXIMIZED:
        try:
            root.state("zoomed")
        except tk.TclError:
            root.attributes("-zoomed", True)

    main_frame = tk.Frame(root, bg="#1a1a1a")
    main_frame.pack(fill="both", expand=True)
    return root, main_frame


def build_topbar(parent):
    """Top row holding the action buttons; returns the button frame."""
    button_row = tk.Frame(parent, bg="#1a1a1a")
    button_row.pack(fill="x", padx=10, pady=(5, 0))
    button_frame = tk.Frame(button_row, bg="#1a1a1a")
    button_frame.pack(side="right")
    return button_frame


def build_tabs(main_frame, root, args):
    """Create tabs and wire the viewer and debug pane; returns (tabs, viewer_shutdown)."""
    from gui.layout import build_debug_pane, create_main_gui
    from gui.viewer import setup_viewer_tab

    tabs, _notebook = create_main_gui(main_frame)

    attach_debug_widget(build_debug_pane(tabs["Debug Log"]))
    start_debug_updater(root)
    log_debug("🔧 Debug log ready.")

    setup_viewer_tab(tabs["Viewer"], angle=args.angle, pitch=args.pitch, yaw=args.yaw)
    viewer_shutdown = getattr(tabs["Viewer"], "_shutdown", lambda: None)
    return tabs, viewer_shutdown


# ----------------------------------------------------------------------------
# Shutdown plumbing
# ----------------------------------------------------------------------------

def make_shutdown(root, viewer_shutdown):

    def shutdown():
        if app_state.is_shutting_down:
            return
        log_debug("🛑 Shutdown requested")
        app_state.is_shutting_down = True
        app_state.is_playing = False

        viewer_shutdown()
        # Stop Tk's internal repeaters (prevents "...scroll" errors during teardown)
        try:
            root.tk.call("tk", "cancelrepeat")
        except tk.TclError:
            pass
        root.quit()

    return shutdown


# ----------------------------------------------------------------------------
# Main
# ----------------------------------------------------------------------------

def main(argv=None):
    args = parse_args(argv)
    info = version_info()

    if args.version:
        print(f"{info['APP_NAME']} {info['VERSION']}")
        print(f"Git Commit: {info['GIT_COMMIT']}")
        print(f"Build Date: {info['BUILD_DATE']}")
        sys.exit(0)

    set_debug_level(args.debug)

    # Encode/decode every angle before the window shows up
    init_ctx()

    root, main_frame = build_root(info)
    button_frame = build_topbar(main_frame)
    tabs, viewer_shutdown = build_tabs(main_frame, root, args)

    shutdown = make_shutdown(root, viewer_shutdown)
    ttk.Button(button_frame, text="⏻ Exit", style="TButton", command=shutdown).pack(side="left", padx=(0, 5))
    root.protocol("WM_DELETE_WINDOW", shutdown)

    try:
        root.mainloop()
    finally:
        try:
            root.destroy()
        except tk.TclError:
            pass


if __name__ == "__main__":
    main()
