"""
keyboard.py
-----------
Operator key bindings. Applied between cycles, never mid-pipeline.

Manual velocity keys write straight into the controller's setpoint; with
following on, the next detection overwrites the axes the control law owns.
"""

import logging

from schemas import ControllerState

logger = logging.getLogger(__name__)

ESC = 0x1B

KEY_HELP = [
    ("SPACE", "Take off / land"),
    ("W", "Move forward"),
    ("S", "Move backward"),
    ("A", "Rotate left"),
    ("D", "Rotate right"),
    ("Q", "Move left"),
    ("E", "Move right"),
    ("I", "Move up"),
    ("K", "Move down"),
    ("C", "Switch camera"),
    ("V", "Calibrate"),
    ("T", "Flat trim"),
    ("P", "Emergency"),
    ("F", "Follow on/off"),
    ("L", "Land autonomously on/off"),
    ("ESC", "Quit"),
]

# key -> (setpoint attribute, value)
_MANUAL = {
    "w": ("forward", 1.0),
    "s": ("forward", -1.0),
    "a": ("yaw_rate", 1.0),
    "d": ("yaw_rate", -1.0),
    "q": ("left", 1.0),
    "e": ("left", -1.0),
    "i": ("up", 1.0),
    "k": ("up", -1.0),
}


def print_key_help():
    logger.info("------- KEYBOARD FUNCTIONS -------")
    for key, action in KEY_HELP:
        logger.info("%s: %s", key, action)


def handle_key(key: int, state: ControllerState, mode_state, sink, on_mode_switch=None) -> bool:
    """
    Apply one key press.

    Parameters
    ----------
    key : int
        Raw value from cv2.waitKey (-1 when nothing was pressed).
    state : ControllerState
        Flags and setpoint to mutate.
    mode_state : ModeState
        Toggled by 'c'.
    sink : command sink
        Receives discrete commands.
    on_mode_switch : callable, optional
        Called after a camera switch (resets per-episode controller memory).

    Returns
    -------
    bool
        True if a manual velocity key changed the setpoint. ESC is not
        handled here, see `is_quit`.
    """
    # exact codes only: no case folding, no masking of extended keys
    if key < 0 or key > 0xFF:
        return False
    ch = chr(key)

    if ch == " ":
        if sink.airborne:
            sink.land()
        else:
            sink.takeoff()
    elif ch == "c":
        mode_state.toggle()
        if on_mode_switch is not None:
            on_mode_switch()
    elif ch in _MANUAL:
        attr, value = _MANUAL[ch]
        setattr(state.setpoint, attr, value)
        return True
    elif ch == "v":
        sink.calibrate()
    elif ch == "t":
        sink.flat_trim()
    elif ch == "p":
        sink.emergency_stop()
    elif ch == "f":
        state.flags.follow = not state.flags.follow
        logger.info("Following %s", "ON" if state.flags.follow else "OFF")
    elif ch == "l":
        state.flags.auto_land = not state.flags.auto_land
        logger.info("Auto landing %s", "ON" if state.flags.auto_land else "OFF")
    return False


def is_quit(key: int) -> bool:
    return key == ESC
