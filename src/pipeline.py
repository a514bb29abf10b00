"""
pipeline.py
-----------
One control cycle of the follow controller, frame in → command out.

    BGR frame
      → HSV → segment (inRange + close)      [perception/segmenter]
      → largest external contour             [perception/contours]
      → centroid + area, min-area gate       [perception/estimator]
      → deadzone status                      [perception/deadzone]
      → per-camera proportional law          [control/follow]
      → command sink (velocity, land)        [interfaces/mavlink_utils]

The orchestrator owns the `ControllerState` and applies operator input only
between cycles, so a cycle never segments with a half-updated range.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

import config as C
from schemas import ControllerState, DeadzoneStatus, Detection
from src.control.follow import FollowController
from src.control.mode_state import ModeState
from src.interfaces.keyboard import handle_key, is_quit
from src.perception.contours import select_largest
from src.perception.deadzone import outside_deadzone
from src.perception.estimator import estimate
from src.perception.segmenter import segment, to_hsv

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """What one cycle saw and did (for display and tests)."""
    detection: Detection
    mask: np.ndarray
    contour: Optional[np.ndarray] = None
    status: Optional[DeadzoneStatus] = None
    velocity_sent: bool = False
    land_sent: bool = False


class TrackingPipeline:
    """
    Parameters
    ----------
    mode_state : ModeState
        Active camera mode + config.
    sink : command sink
        `set_velocity(VelocitySetpoint)`, `land()`, ... (see MavlinkCommandSink).
    follow : FollowController, optional
    state : ControllerState, optional
    """

    def __init__(self, mode_state: ModeState, sink, follow: Optional[FollowController] = None,
                 state: Optional[ControllerState] = None,
                 frame_size=(C.FRAME_WIDTH, C.FRAME_HEIGHT)):
        self.mode_state = mode_state
        self.sink = sink
        self.follow = follow or FollowController(frame_size=frame_size)
        self.state = state or ControllerState()
        self.frame_size = frame_size
        self._manual_pending = False

    def step(self, frame_bgr: np.ndarray) -> CycleResult:
        cfg = self.mode_state.config

        hsv = to_hsv(frame_bgr)
        mask = segment(hsv, cfg.color)
        contour = select_largest(mask)
        det = estimate(contour, cfg.area.min_pixels, mask.shape)
        self.state.detection = det

        result = CycleResult(detection=det, mask=mask, contour=contour)
        send = self._manual_pending
        self._manual_pending = False

        land = False
        if det.found:
            self.state.last_position = det.position
            if self.state.flags.follow:
                status = outside_deadzone(det.position, self.frame_size, cfg.deadzone)
                out = self.follow.update(self.mode_state.mode, det, status, cfg.area,
                                         self.state.flags, self.state.setpoint)
                self.state.setpoint = out.setpoint
                result.status = status
                land = out.land
                send = True

        if send:
            self.sink.set_velocity(self.state.setpoint)
            result.velocity_sent = True
        if land:
            self.sink.land()
            result.land_sent = True
        return result

    def apply_key(self, key: int) -> bool:
        """Apply operator input. Returns False when the operator asked to quit."""
        if is_quit(key):
            return False
        if handle_key(key, self.state, self.mode_state, self.sink,
                      on_mode_switch=self.follow.reset):
            self._manual_pending = True
        return True

    def shutdown(self):
        """Flush the active config to the store."""
        self.mode_state.flush()
        logger.info("Saved %s camera config", self.mode_state.mode.value)
