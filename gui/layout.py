# gui/layout.py
# Dark ttk theme, the notebook shell and the log pane for the VDRM viewer.

import tkinter as tk
from tkinter import ttk

DARK_BG = "#1a1a1a"
DARK_FG = "#ffffff"
DARK_SELECT = "#333333"
DARK_TAB_BG = "#2d2d2d"
DARK_TAB_ACTIVE = "#444444"
DARK_MUTED = "#bbbbbb"

# (selected, hover) colors of the viewer's toggle buttons
TOGGLE_COLORS = {
    "Toggle.TCheckbutton": ("#226688", "#3388aa"),   # All angles
    "Play.TCheckbutton": ("#2f7a3a", "#3d9a4a"),     # angle sweep running
}

TAB_NAMES = ["Viewer", "Debug Log"]

UI_FONT = ("TkDefaultFont", 10)
MONO_FONT = ("Courier", 9)


def setup_styles():
    style = ttk.Style()
    style.theme_use("clam")

    for name in ("TFrame", "TLabel"):
        style.configure(name, background=DARK_BG, foreground=DARK_FG)

    style.configure("TNotebook", background=DARK_BG, borderwidth=0, relief="flat")
    style.configure("TNotebook.Tab", background=DARK_TAB_BG, foreground=DARK_FG,
                    padding=[12, 4], borderwidth=0)
    style.map("TNotebook.Tab",
              background=[("selected", DARK_BG), ("active", DARK_TAB_ACTIVE)],
              foreground=[("selected", DARK_FG)])

    for name in ("TButton", "Action.TButton"):
        style.configure(name, background=DARK_TAB_BG, foreground=DARK_FG,
                        focuscolor=DARK_TAB_BG, padding=6, font=UI_FONT)
        style.map(name, background=[("active", DARK_SELECT)], foreground=[("active", DARK_FG)])

    for name, (selected, hover) in TOGGLE_COLORS.items():
        style.configure(name, background=DARK_TAB_BG, foreground=DARK_FG, font=UI_FONT, padding=6)
        style.map(name,
                  background=[("selected", selected), ("active", hover), ("!selected", DARK_TAB_BG)],
                  foreground=[("selected", DARK_FG), ("active", DARK_FG)])

    style.configure("Dark.Horizontal.TScale", background=DARK_BG, troughcolor="#111111")
    style.configure("Status.TLabel", background=DARK_BG, foreground=DARK_MUTED, font=MONO_FONT)


def create_main_gui(container):
    root = container.winfo_toplevel()
    root.configure(bg=DARK_BG)

    setup_styles()

    notebook = ttk.Notebook(container)
    notebook.pack(fill="both", expand=True, padx=10, pady=5)

    tabs = {}
    for tab_name in TAB_NAMES:
        frame = ttk.Frame(notebook)
        notebook.add(frame, text=tab_name)
        tabs[tab_name] = frame

    return tabs, notebook


def build_debug_pane(debug_frame):
    """Read-only Text + scrollbar for the log; returns the Text widget."""
    text_widget = tk.Text(
        debug_frame, font=MONO_FONT, height=40,
        bg=DARK_BG, fg=DARK_FG, insertbackground=DARK_FG,
        selectbackground=DARK_SELECT, state=tk.DISABLED
    )
    text_widget.pack(side="left", fill="both", expand=True, padx=5, pady=5)

    scrollbar = ttk.Scrollbar(debug_frame, orient="vertical", command=text_widget.yview)
    text_widget.configure(yscrollcommand=scrollbar.set)
    scrollbar.pack(side="right", fill="y")
    return text_widget
