# app/app_state.py
# Shared UI state for the viewer. Only the Tk thread writes these.

is_shutting_down = False

# Current view (what the next draw will render)
selected_angle = None   # None = all angles superimposed
pitch = 0.0
yaw = 0.0

is_playing = False
is_drawing = False
