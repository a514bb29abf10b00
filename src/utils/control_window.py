"""
control_window.py
-----------------
Trackbar window for live tuning of the active camera's color and area bounds.

The window is rebuilt whenever the camera mode switches, so the sliders always
start from the freshly loaded values. Slider positions are copied into the
active `ModeConfig` by `sync()`, which the main loop calls between cycles.
"""

import cv2

import config as C
from schemas import CameraMode, ModeConfig

WINDOW = "Control"

# trackbar label -> (section, field, max value)
TRACKBARS = [
    ("Hue LOW", "color", "hue_low", C.HUE_MAX),
    ("Hue HIGH", "color", "hue_high", C.HUE_MAX),
    ("Sat LOW", "color", "sat_low", C.SAT_MAX),
    ("Sat HIGH", "color", "sat_high", C.SAT_MAX),
    ("Val LOW", "color", "val_low", C.VAL_MAX),
    ("Val HIGH", "color", "val_high", C.VAL_MAX),
    ("Area MIN", "area", "min_area", C.AREA_KNOB_MAX),
    ("Area MAX", "area", "max_area", C.AREA_KNOB_MAX),
]


def _noop(_):
    pass


class ControlWindow:
    def __init__(self, mode_state):
        self.mode_state = mode_state
        self._built = False
        mode_state.add_listener(self.rebuild)
        self.rebuild(mode_state.mode, mode_state.config)

    def rebuild(self, mode: CameraMode, cfg: ModeConfig):
        if self._built:
            cv2.destroyWindow(WINDOW)
        self._built = True
        cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(WINDOW, 1280, 480)
        cv2.moveWindow(WINDOW, 0, C.FRAME_HEIGHT + 35)
        cv2.setWindowTitle(WINDOW, f"Control ({mode.value})")

        for label, section, name, max_value in TRACKBARS:
            value = getattr(getattr(cfg, section), name)
            cv2.createTrackbar(label, WINDOW, min(max(value, 0), max_value), max_value, _noop)

    def sync(self):
        """Copy slider positions into the active config."""
        cfg = self.mode_state.config
        for label, section, name, _ in TRACKBARS:
            setattr(getattr(cfg, section), name, cv2.getTrackbarPos(label, WINDOW))
