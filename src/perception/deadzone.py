"""
deadzone.py
-----------
Geometry of the centered tolerance rectangle.

Positional error inside the deadzone is ignored by the control law. The
same bounds are used for the on-screen guide rectangle, so both always agree.
"""

from typing import Tuple

from schemas import DeadzoneSize, DeadzoneStatus


def deadzone_bounds(frame_size: Tuple[int, int], zone: DeadzoneSize) -> Tuple[int, int, int, int]:
    """
    Return the deadzone rectangle as (x1, y1, x2, y2) in pixels.

    frame_size is (width, height). Integer division matches the pixel grid
    the centroid lives on.
    """
    width, height = frame_size
    x1 = (width - zone.width) // 2
    x2 = (width + zone.width) // 2
    y1 = (height - zone.height) // 2
    y2 = (height + zone.height) // 2
    return x1, y1, x2, y2


def outside_deadzone(pos: Tuple[int, int], frame_size: Tuple[int, int],
                     zone: DeadzoneSize) -> DeadzoneStatus:
    """
    Report which axes of `pos` lie outside the deadzone.

    Edges count as inside. With a non-negative zone size the frame center is
    always inside.
    """
    x, y = pos
    x1, y1, x2, y2 = deadzone_bounds(frame_size, zone)
    return DeadzoneStatus(
        x_out=x < x1 or x > x2,
        y_out=y < y1 or y > y2,
    )
