"""
follow.py
---------
Proportional follow laws for the two camera orientations.

Each law maps the current detection (pixel position + apparent area) and the
deadzone status to a new `VelocitySetpoint`. There are no integral or
derivative terms and no filtering; the gains are fixed per camera because the
two orientations map pixel error to very different physical motion.

Front camera (looking ahead)
----------------------------
• yaw_rate ← (x - W/2) / -FRONT_YAW_GAIN_DIV   when x is outside the deadzone
• up       ← (y - H/2) / -FRONT_UP_GAIN_DIV    when y is outside the deadzone
• forward  ← APPROACH_SPEED when area < max, RETREAT_SPEED when area > max + margin

Bottom camera (looking down)
----------------------------
• forward ← (y - H/2) / -BOTTOM_FORWARD_GAIN_DIV   when y is outside the deadzone
• left    ← (x - W/2) / -BOTTOM_LEFT_GAIN_DIV      when x is outside the deadzone
• with auto-land: up ← DESCENT_RATE, and a land request once the target
  fills the view (area > max).

Coasting
--------
Inside the deadzone, and in the area band between max and max + margin, the
axis keeps its previous value instead of being reset to zero. This hysteresis
keeps the vehicle from twitching on measurement noise around the setpoint.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

import config as C
from schemas import (
    AreaRange,
    CameraMode,
    DeadzoneStatus,
    Detection,
    FollowFlags,
    VelocitySetpoint,
)
from src.interfaces.frame_utils import frame_center

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FollowOutput:
    """New setpoint plus whether a discrete land command is requested."""
    setpoint: VelocitySetpoint
    land: bool = False


class FollowLaw:
    """Common contract for the per-camera control laws."""

    def compute_setpoints(self, detection: Detection, status: DeadzoneStatus,
                          area_range: AreaRange, flags: FollowFlags,
                          current: VelocitySetpoint) -> FollowOutput:
        raise NotImplementedError

    def reset(self):
        """Drop any per-episode memory (called on mode switch)."""


class FrontCameraLaw(FollowLaw):
    """Center the target with yaw/vertical, hold distance with forward speed."""

    def __init__(self, frame_width: int = C.FRAME_WIDTH, frame_height: int = C.FRAME_HEIGHT):
        self.cx, self.cy = frame_center(frame_width, frame_height)

    def compute_setpoints(self, detection, status, area_range, flags, current):
        sp = replace(current)

        if status.y_out:
            sp.up = (detection.y - self.cy) / -C.FRONT_UP_GAIN_DIV
        if status.x_out:
            sp.yaw_rate = (detection.x - self.cx) / -C.FRONT_YAW_GAIN_DIV

        if detection.area < area_range.max_pixels:
            sp.forward = C.APPROACH_SPEED
        elif detection.area > area_range.backoff_pixels:
            sp.forward = C.RETREAT_SPEED

        return FollowOutput(setpoint=sp)


class BottomCameraLaw(FollowLaw):
    """
    Hover over the target with forward/lateral motion; optionally descend
    and land on it.

    The land request is latched: it is raised on the first evaluated cycle
    with area above max and not again until a cycle sees the area drop back
    to or below max (or auto-land is switched off).
    """

    def __init__(self, frame_width: int = C.FRAME_WIDTH, frame_height: int = C.FRAME_HEIGHT):
        self.cx, self.cy = frame_center(frame_width, frame_height)
        self._land_latched = False

    def reset(self):
        self._land_latched = False

    def compute_setpoints(self, detection, status, area_range, flags, current):
        sp = replace(current)

        if status.y_out:
            sp.forward = (detection.y - self.cy) / -C.BOTTOM_FORWARD_GAIN_DIV
        if status.x_out:
            sp.left = (detection.x - self.cx) / -C.BOTTOM_LEFT_GAIN_DIV

        land = False
        if flags.auto_land:
            sp.up = C.DESCENT_RATE
            if detection.area > area_range.max_pixels:
                if not self._land_latched:
                    logger.info("Target fills bottom view (area=%.0f px): requesting land",
                                detection.area)
                    land = True
                self._land_latched = True
            else:
                self._land_latched = False
        else:
            self._land_latched = False

        return FollowOutput(setpoint=sp, land=land)


class FollowController:
    """
    Selects the law for the active camera mode once per cycle.

    Usage Example
    -------------
    >>> ctrl = FollowController()
    >>> out = ctrl.update(CameraMode.FRONT, det, status, cfg.area, flags, sp)
    >>> sink.set_velocity(out.setpoint)
    """

    def __init__(self, laws: Optional[Dict[CameraMode, FollowLaw]] = None,
                 frame_size: Tuple[int, int] = (C.FRAME_WIDTH, C.FRAME_HEIGHT)):
        # laws must be centered on the same frame the deadzone is evaluated on
        self.laws = laws or {
            CameraMode.FRONT: FrontCameraLaw(*frame_size),
            CameraMode.BOTTOM: BottomCameraLaw(*frame_size),
        }

    def update(self, mode: CameraMode, detection: Detection, status: DeadzoneStatus,
               area_range: AreaRange, flags: FollowFlags,
               current: VelocitySetpoint) -> FollowOutput:
        law = self.laws[mode]
        out = law.compute_setpoints(detection, status, area_range, flags, current)
        logger.debug("%s law: det=(%d,%d,%.0f) out=%s -> %s",
                     mode.value, detection.x, detection.y, detection.area, status, out)
        return out

    def reset(self):
        for law in self.laws.values():
            law.reset()
