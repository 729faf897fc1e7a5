# gui/viewer.py
# Interactive VDRM scene viewer (Tk + matplotlib).
#
# Mouse:
#   Drag = rotate camera (horizontal → yaw, vertical → pitch)
# Keys:
#   Left / Right: previous / next mirror angle
#   A: toggle "all angles"
#   Space: play / pause the angle sweep
#   R: reset camera

import time
import tkinter as tk
from tkinter import ttk

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

import app.app_state as app_state
from codec.geometry import TOTAL_ANGLES
from config import BACKGROUND, MIN_REDRAW_INTERVAL, PLAY_INTERVAL_MS
from gui.controls import apply_drag, default_camera, status_text, step_angle, validate_angle
from gui.layout import DARK_BG
from gui.renderer import DrawError, draw
from utils.debug import log_debug


class VDRMViewer:
    def __init__(self, parent, angle=None, pitch=None, yaw=None):
        self.parent = parent
        cam_pitch, cam_yaw = default_camera()
        app_state.selected_angle = validate_angle(angle)
        app_state.pitch = cam_pitch if pitch is None else float(pitch)
        app_state.yaw = cam_yaw if yaw is None else float(yaw)

        self._drag_origin = None
        self._last_draw = 0.0
        self._pending_id = None
        self._play_id = None

        self._build_controls()

        self.fig = Figure(figsize=(7, 7), dpi=100, facecolor=BACKGROUND)
        self.canvas = FigureCanvasTkAgg(self.fig, master=parent)
        widget = self.canvas.get_tk_widget()
        widget.pack(fill="both", expand=True)

        self.status_var = tk.StringVar(value="")
        ttk.Label(parent, textvariable=self.status_var, style="Status.TLabel").pack(
            fill="x", padx=8, pady=(2, 6))

        self.canvas.mpl_connect("button_press_event", self._on_press)
        self.canvas.mpl_connect("button_release_event", self._on_release)
        self.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.canvas.mpl_connect("key_press_event", self._on_key)
        self.canvas.mpl_connect("resize_event", lambda _evt: self.request_redraw())
        self.canvas.mpl_connect("figure_enter_event", lambda _evt: widget.focus_set())

        self._sync_controls()
        self.redraw()

    # --------------------------- controls ----------------------------- #

    def _build_controls(self):
        bar = tk.Frame(self.parent, bg=DARK_BG)
        bar.pack(fill="x", padx=8, pady=6)

        self.all_var = tk.IntVar(value=1)
        ttk.Checkbutton(bar, text="All angles", variable=self.all_var,
                        style="Toggle.TCheckbutton", command=self._on_all_toggle).pack(side="left")

        ttk.Label(bar, text="Angle:").pack(side="left", padx=(12, 4))
        self.angle_var = tk.IntVar(value=0)
        self.angle_scale = ttk.Scale(bar, from_=0, to=TOTAL_ANGLES - 1, orient="horizontal",
                                     style="Dark.Horizontal.TScale", command=self._on_scale)
        self.angle_scale.pack(side="left", fill="x", expand=True, padx=(0, 8))
        ttk.Label(bar, textvariable=self.angle_var, width=4).pack(side="left")

        self.play_var = tk.IntVar(value=0)
        ttk.Checkbutton(bar, text="▶ Play", variable=self.play_var,
                        style="Play.TCheckbutton", command=self._on_play_toggle).pack(side="left", padx=8)
        ttk.Button(bar, text="Reset view", style="Action.TButton",
                   command=self.reset_camera).pack(side="left")

    def _sync_controls(self):
        angle = app_state.selected_angle
        self.all_var.set(1 if angle is None else 0)
        if angle is not None:
            self.angle_var.set(angle)
            self.angle_scale.set(angle)

    def _on_all_toggle(self):
        self.select_angle(None if self.all_var.get() else int(self.angle_var.get()))

    def _on_scale(self, value):
        angle = int(round(float(value)))
        if angle == app_state.selected_angle:
            return
        self.angle_var.set(angle)
        self.select_angle(angle)

    def _on_play_toggle(self):
        self.set_playing(bool(self.play_var.get()))

    # ---------------------------- state ------------------------------- #

    def select_angle(self, angle):
        app_state.selected_angle = validate_angle(angle)
        self._sync_controls()
        self.redraw()

    def reset_camera(self):
        app_state.pitch, app_state.yaw = default_camera()
        self.redraw()

    def set_playing(self, playing):
        app_state.is_playing = playing
        self.play_var.set(1 if playing else 0)
        if self._play_id is not None:
            self.parent.after_cancel(self._play_id)
            self._play_id = None
        if playing:
            log_debug("▶ Angle sweep started")
            self._play_id = self.parent.after(PLAY_INTERVAL_MS, self._play_tick)
        else:
            log_debug("⏸ Angle sweep paused")

    def _play_tick(self):
        self._play_id = None
        if app_state.is_shutting_down or not app_state.is_playing:
            return
        self.select_angle(step_angle(app_state.selected_angle, +1))
        self._play_id = self.parent.after(PLAY_INTERVAL_MS, self._play_tick)

    # ---------------------------- events ------------------------------ #

    def _on_press(self, event):
        if event.button == 1 and event.x is not None:
            self._drag_origin = (event.x, event.y)

    def _on_release(self, _event):
        self._drag_origin = None
        self.redraw()

    def _on_motion(self, event):
        if self._drag_origin is None or event.x is None:
            return
        x0, y0 = self._drag_origin
        # Matplotlib event y grows upward
        app_state.pitch, app_state.yaw = apply_drag(
            app_state.pitch, app_state.yaw, event.x - x0, y0 - event.y)
        self._drag_origin = (event.x, event.y)
        self.request_redraw()

    def _on_key(self, event):
        k = event.key or ""
        if k == "left":
            self.select_angle(step_angle(app_state.selected_angle, -1))
        elif k == "right":
            self.select_angle(step_angle(app_state.selected_angle, +1))
        elif k.lower() == "a":
            self.select_angle(None if app_state.selected_angle is not None else int(self.angle_var.get()))
        elif k == " ":
            self.set_playing(not app_state.is_playing)
        elif k.lower() == "r":
            self.reset_camera()

    # --------------------------- drawing ------------------------------ #

    def request_redraw(self):
        """Throttled redraw for drag/resize storms; the last request always lands."""
        if self._pending_id is not None:
            return
        wait = MIN_REDRAW_INTERVAL - (time.time() - self._last_draw)
        delay_ms = max(1, int(wait * 1000))

        def run():
            self._pending_id = None
            self.redraw()

        self._pending_id = self.parent.after(delay_ms, run)

    def redraw(self):
        if app_state.is_shutting_down or app_state.is_drawing:
            return
        app_state.is_drawing = True
        angle, pitch, yaw = app_state.selected_angle, app_state.pitch, app_state.yaw
        try:
            info = draw(self.fig, angle=angle, pitch=pitch, yaw=yaw)
            self.status_var.set(status_text(angle, pitch, yaw, info))
        except DrawError as e:
            log_debug(f"❌ Draw failed: {e}", level="MINIMAL")
            self.status_var.set(f"❌ {e}")
        finally:
            app_state.is_drawing = False
            self._last_draw = time.time()
        self.canvas.draw_idle()

    def shutdown(self):
        for after_id in (self._pending_id, self._play_id):
            if after_id is None:
                continue
            try:
                self.parent.after_cancel(after_id)
            except tk.TclError:
                pass
        self._pending_id = self._play_id = None


def setup_viewer_tab(frame, angle=None, pitch=None, yaw=None):
    viewer = VDRMViewer(frame, angle=angle, pitch=pitch, yaw=yaw)
    frame._shutdown = viewer.shutdown
    return viewer
