"""
===============================================================================
 VDRM Emulator Viewer — Configuration File
===============================================================================

This file contains user-tunable settings for the viewer window, the camera,
the rendering style, and the LED panel model used by the codec. Adjust values
here to trade responsiveness against detail.

SETTINGS YOU MAY EDIT:
- DEFAULT_PITCH / DEFAULT_YAW : Camera pose (radians) when the window opens
                                or when the camera is reset with "r".
- DRAG_SENSITIVITY            : Radians of pitch/yaw per pixel of mouse drag.
- PLAY_INTERVAL_MS            : Delay between angle steps while "Play" runs.
- POINT_SIZE                  : Marker size of the point clouds (points^2).

DO NOT CHANGE UNLESS YOU KNOW WHAT YOU ARE DOING:
- LED_COLUMNS / LED_ROWS : Resolution of one physical LED panel. Changing it
                           changes the quantized (LED) cloud the codec emits.
- SWEEP_TOLERANCE        : Distance from a panel plane within which a
                           reflected voxel counts as displayed at an angle.
                           None derives it from the angle step.
- AXIS_RANGE / AXIS_STEP : Extent of the 3D chart cube and its gridline step.

General Guidance:
- If dragging feels sluggish, raise MIN_REDRAW_INTERVAL a little; every redraw
  scatters the full aggregate cloud when no angle is selected.
- The context (encode + decode of every angle) is built once at startup.

===============================================================================
"""

import math

# === Window preferences ===
WINDOW_START_MAXIMIZED = False
WINDOW_GEOMETRY = "1100x900"
WINDOW_MINSIZE = (640, 560)

# Optional pixel density scaling for HiDPI (1.0 = 100%)
TK_SCALING = 1.0

# === Camera ===
DEFAULT_PITCH = 1.1   # radians; 0 = looking straight down the rotation axis
DEFAULT_YAW = 0.6     # radians
DRAG_SENSITIVITY = 0.01
PITCH_LIMIT = math.pi / 2

# === Interaction ===
PLAY_INTERVAL_MS = 80         # angle step period while playing
MIN_REDRAW_INTERVAL = 0.05    # seconds between drag-triggered redraws

# === Rendering style ===
BACKGROUND = "#ffffff"
AXIS_RANGE = 1.5              # chart cube is [-AXIS_RANGE, AXIS_RANGE]^3
AXIS_STEP = 0.1               # gridline spacing
TICK_EVERY = 5                # label every Nth gridline
LABEL_FONT_PX = 20            # axis glyph size in pixels
POINT_SIZE = 2.0              # scatter marker area (points^2)
VIEW_SCALE = 0.7              # zoom-out margin applied by the projection

# === Headless export ===
EXPORT_SIZE = (800, 800)      # pixels
EXPORT_DPI = 100
EXPORT_DIR = "frames"

# === LED panel model (codec) ===
LED_COLUMNS = 64
LED_ROWS = 32
SWEEP_TOLERANCE = None        # None → derived from TOTAL_ANGLES
