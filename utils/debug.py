# utils/debug.py
"""
VDRM Emulator Viewer — Debug Logging Utilities
----------------------------------------------
A small in-process log shared by the context builder, the renderer, the
viewer window and the headless exporter.

Public API
----------
set_debug_level(level: str)
    "FULL" (default) or "MINIMAL". In MINIMAL mode only messages logged with
    level="MINIMAL" are kept.

log_debug(message: str, level: str = "FULL")
    Timestamp the message, append it to the ring buffer, print to stdout.

recent_lines(n: int = 500) -> list[str]
    Tail of the ring buffer (used by the log pane and by tests).

attach_debug_widget(widget: tk.Text) / start_debug_updater(root: tk.Tk)
    Mirror the tail of the buffer into a Text widget (~4 Hz) until the
    window is destroyed or the app starts shutting down.
"""

import time
from collections import deque

# Bounded ring buffer of recent log lines.
debug_log = deque(maxlen=10000)

debug_widget = None

DEBUG_LEVEL = "FULL"
_LEVELS = ("FULL", "MINIMAL")

_debug_after_id = [None]


def set_debug_level(level):
    global DEBUG_LEVEL
    level = str(level).upper()
    if level not in _LEVELS:
        raise ValueError(f"Unknown debug level: {level!r} (expected one of {_LEVELS})")
    DEBUG_LEVEL = level


def log_debug(message, level="FULL"):
    """
    Append a timestamped message to the ring buffer and print to stdout.
    Messages below the active level are dropped.
    """
    if DEBUG_LEVEL == "MINIMAL" and level != "MINIMAL":
        return
    timestamp = time.strftime("%H:%M:%S")
    full_msg = f"[{timestamp}] {message}"
    debug_log.append(full_msg)
    print(full_msg)


def recent_lines(n=500):
    if n <= 0:
        return []
    return list(debug_log)[-n:]


# -------- GUI wiring ----------------------------------------------------------

def attach_debug_widget(widget):
    global debug_widget
    debug_widget = widget


def start_debug_updater(root):
    """
    Start a recurring Tk `after()` loop that mirrors the buffer into the
    attached Text widget. Stops on shutdown or when the widget goes away.
    """
    import tkinter as tk
    from app import app_state

    def update_gui():
        if app_state.is_shutting_down or debug_widget is None:
            return
        try:
            if not debug_widget.winfo_exists():
                return
            debug_widget.config(state=tk.NORMAL)
            debug_widget.delete(1.0, tk.END)
            debug_widget.insert(tk.END, "\n".join(recent_lines(500)))
            debug_widget.config(state=tk.DISABLED)
            debug_widget.see(tk.END)
        except tk.TclError:
            # Widget torn down between ticks
            return

        try:
            _debug_after_id[0] = root.after(250, update_gui)
        except tk.TclError:
            return

    _debug_after_id[0] = root.after(250, update_gui)

    def _shutdown(*_):
        if _debug_after_id[0] is None:
            return
        try:
            root.after_cancel(_debug_after_id[0])
        except tk.TclError:
            pass
        _debug_after_id[0] = None

    root.bind("<Destroy>", _shutdown, add="+")
