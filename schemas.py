"""
schemas.py
-----------
Lightweight data containers (using Python dataclasses) for key data exchanged
between perception, decision, and control modules.

These define the standardized structure of information that flows through
the pipeline — mainly:
- `ModeConfig`: the per-camera tunables (color bounds, area bounds, deadzone).
- `Detection`: what the perception system "sees" at a given frame.
- `VelocitySetpoint`: what the control system "decides" to send.
- `ControllerState`: everything the control loop carries between cycles.

This helps maintain clean interfaces and avoids hard-to-track dicts/globals.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import config as C


class CameraMode(Enum):
    """Active camera orientation. Each mode has its own config and control law."""
    FRONT = "front"
    BOTTOM = "bottom"

    def other(self) -> "CameraMode":
        return CameraMode.BOTTOM if self is CameraMode.FRONT else CameraMode.FRONT


# ---------------------------------------------------------------------------
# Per-mode tunables
# ---------------------------------------------------------------------------
@dataclass
class ColorRange:
    """
    Inclusive HSV bounds (OpenCV ranges: hue 0–179, sat/val 0–255).

    low > high on any channel is a valid state; it just matches nothing.
    """
    hue_low: int = 0
    hue_high: int = C.HUE_MAX
    sat_low: int = 0
    sat_high: int = C.SAT_MAX
    val_low: int = 0
    val_high: int = C.VAL_MAX

    def lower(self) -> Tuple[int, int, int]:
        return (self.hue_low, self.sat_low, self.val_low)

    def upper(self) -> Tuple[int, int, int]:
        return (self.hue_high, self.sat_high, self.val_high)


@dataclass
class AreaRange:
    """
    Accepted detection size, in knob units.

    Compare against pixel area only through `min_pixels` / `max_pixels`,
    which apply `config.AREA_SCALE`.
    """
    min_area: int = C.DEFAULT_MIN_AREA
    max_area: int = C.DEFAULT_MAX_AREA

    @property
    def min_pixels(self) -> float:
        return self.min_area * C.AREA_SCALE

    @property
    def max_pixels(self) -> float:
        return self.max_area * C.AREA_SCALE

    @property
    def backoff_pixels(self) -> float:
        return (self.max_area + C.BACKOFF_MARGIN) * C.AREA_SCALE


@dataclass
class DeadzoneSize:
    """Centered tolerance rectangle [pixels]."""
    width: int = C.DEFAULT_DEADZONE_X
    height: int = C.DEFAULT_DEADZONE_Y


@dataclass
class ModeConfig:
    """The (color, area, deadzone) triple that is active for one camera mode."""
    color: ColorRange = field(default_factory=ColorRange)
    area: AreaRange = field(default_factory=AreaRange)
    deadzone: DeadzoneSize = field(default_factory=DeadzoneSize)


# ---------------------------------------------------------------------------
# Per-frame results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Detection:
    """
    Result of one perception pass.

    Attributes
    ----------
    found : bool
        True when a region exists AND its area exceeds the configured minimum.
        "Found" means "large enough to act on", not "a blob exists".
    x, y : int
        Centroid in pixels. Only meaningful when `found` is True.
    area : float
        Region area in pixels (zeroth moment). Reported for diagnostics even
        when `found` is False, but callers must not act on it in that case.
    """
    found: bool
    x: int = 0
    y: int = 0
    area: float = 0.0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class DeadzoneStatus:
    """Which axes of the last position fall outside the deadzone."""
    x_out: bool
    y_out: bool


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@dataclass
class VelocitySetpoint:
    """
    Normalized velocity setpoint, body FLU frame.

    Attributes
    ----------
    forward, left, up : float
        Desired linear velocity, nominally in [-1, 1].
        - Clamped and scaled by the command sink, not here.
    yaw_rate : float
        Desired yaw rate, nominally in [-1, 1].
        - Positive = counterclockwise turn (to the left).
    """
    forward: float = 0.0
    left: float = 0.0
    up: float = 0.0
    yaw_rate: float = 0.0


@dataclass
class FollowFlags:
    """Operator toggles that gate the control law."""
    follow: bool = False
    auto_land: bool = False


@dataclass
class ControllerState:
    """
    Everything the control loop carries from one cycle to the next.

    Owned by the pipeline orchestrator; nothing here is process-global.
    """
    flags: FollowFlags = field(default_factory=FollowFlags)
    setpoint: VelocitySetpoint = field(default_factory=VelocitySetpoint)
    detection: Detection = field(default_factory=lambda: Detection(found=False))
    last_position: Optional[Tuple[int, int]] = None
