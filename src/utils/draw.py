"""
draw.py
--------
Visualization utilities for the follow controller.

Provides simple OpenCV-based drawing helpers for:
- The deadzone guide rectangle.
- The selected contour and the centroid marker.
- A stats panel (detected / following / auto landing / area) that is only
  redrawn every few frames so the text does not flicker.

Nothing here feeds back into control; it only decorates the display frame.
"""

from typing import List, Optional, Tuple

import cv2
import numpy as np

import config as C
from schemas import CameraMode, ControllerState

GREEN = (0, 255, 0)
RED = (0, 0, 255)
CYAN = (255, 255, 0)
YELLOW = (0, 255, 255)
MAGENTA = (255, 0, 255)


# ---------------------------------------------------------------------------
# Guides
# ---------------------------------------------------------------------------
def draw_deadzone(frame, bounds: Tuple[int, int, int, int], color=MAGENTA):
    """Draw the deadzone rectangle given as (x1, y1, x2, y2)."""
    x1, y1, x2, y2 = bounds
    cv2.rectangle(frame, (x1, y1), (x2, y2), color, 1)
    return frame


def draw_target(frame, contour: Optional[np.ndarray], position: Optional[Tuple[int, int]]):
    """
    Outline the selected contour and mark the centroid.

    Parameters
    ----------
    frame : np.ndarray
        BGR display frame.
    contour : np.ndarray or None
        Contour from `select_largest`; skipped when None.
    position : (int, int) or None
        Centroid; only passed when the detection counts as found.
    """
    if contour is not None:
        cv2.drawContours(frame, [contour], -1, GREEN, 2, cv2.LINE_8)
    if position is not None:
        cv2.drawMarker(frame, position, YELLOW, cv2.MARKER_CROSS, 25, 2)
    return frame


# ---------------------------------------------------------------------------
# Stats panel
# ---------------------------------------------------------------------------
def stats_lines(state: ControllerState, mode: CameraMode) -> List[Tuple[str, tuple]]:
    """Build (text, color) rows for the stats panel."""
    det = state.detection
    rows = [
        ("OBJECT DETECTED", GREEN) if det.found else ("NO OBJECT DETECTED", RED),
        ("FOLLOWING ON", GREEN) if state.flags.follow else ("FOLLOWING OFF", RED),
        ("AUTO LANDING ON", GREEN) if state.flags.auto_land else ("AUTO LANDING OFF", RED),
        (f"Camera: {mode.value.upper()}", CYAN),
        (f"Object area: {det.area / C.AREA_SCALE:.2f}", CYAN),
    ]
    return rows


class StatsPanel:
    """Caches the stats rows and refreshes them every `refresh_rate` frames."""

    def __init__(self, refresh_rate: int = C.STAT_REFRESH_RATE):
        self.refresh_rate = refresh_rate
        self.count = refresh_rate  # draw on the first frame
        self.rows: List[Tuple[str, tuple]] = []

    def update(self, state: ControllerState, mode: CameraMode):
        if self.count >= self.refresh_rate:
            self.rows = stats_lines(state, mode)
            self.count = 1
        else:
            self.count += 1

    def draw(self, frame):
        y = 30
        for text, color in self.rows:
            cv2.putText(frame, text, (10, y), cv2.FONT_HERSHEY_COMPLEX_SMALL, 0.9, color)
            y += 30
        return frame
