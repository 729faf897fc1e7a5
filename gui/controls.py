# gui/controls.py
# Camera and angle-selection rules for the viewer, kept free of Tk so the
# headless exporter and the tests share them.

import math

from codec.geometry import TOTAL_ANGLES
from config import DEFAULT_PITCH, DEFAULT_YAW, DRAG_SENSITIVITY, PITCH_LIMIT


def clamp_pitch(pitch: float) -> float:
    return max(-PITCH_LIMIT, min(PITCH_LIMIT, float(pitch)))


def wrap_yaw(yaw: float) -> float:
    """Keep yaw in (-pi, pi] so long drags don't accumulate huge values."""
    yaw = math.fmod(float(yaw) + math.pi, 2.0 * math.pi)
    if yaw <= 0.0:
        yaw += 2.0 * math.pi
    return yaw - math.pi


def apply_drag(pitch, yaw, dx, dy, sensitivity=DRAG_SENSITIVITY):
    """Horizontal motion turns yaw, vertical motion tilts pitch."""
    return clamp_pitch(pitch + dy * sensitivity), wrap_yaw(yaw + dx * sensitivity)


def default_camera():
    return clamp_pitch(DEFAULT_PITCH), wrap_yaw(DEFAULT_YAW)


def validate_angle(angle):
    """None (all angles) or an int in 0..TOTAL_ANGLES-1; anything else raises ValueError."""
    if angle is None:
        return None
    try:
        value = int(angle)
    except (TypeError, ValueError):
        raise ValueError(f"angle must be an integer, got {angle!r}") from None
    if value != angle and not isinstance(angle, str):
        raise ValueError(f"angle must be an integer, got {angle!r}")
    if not 0 <= value < TOTAL_ANGLES:
        raise ValueError(f"angle {value} outside 0..{TOTAL_ANGLES - 1}")
    return value


def step_angle(angle, delta):
    """Next angle, wrapping around the revolution. From 'all', start at 0."""
    if angle is None:
        return 0 if delta >= 0 else TOTAL_ANGLES - 1
    return (int(angle) + int(delta)) % TOTAL_ANGLES


def status_text(angle, pitch, yaw, info=None):
    which = "all" if angle is None else f"{angle:3d}/{TOTAL_ANGLES}"
    text = f"angle {which}  pitch {math.degrees(pitch):6.1f}°  yaw {math.degrees(yaw):6.1f}°"
    if info:
        text += f"  real {info['real']}  emu {info['emu']}  led {info['led']}"
    return text
