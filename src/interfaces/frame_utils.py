from typing import Tuple

import numpy as np

from schemas import VelocitySetpoint


def clamp(x, lo, hi):
    return max(lo, min(hi, x))


def clamp_setpoint(sp: VelocitySetpoint, limit: float = 1.0) -> VelocitySetpoint:
    """Saturate every axis of a normalized setpoint to [-limit, limit]."""
    return VelocitySetpoint(
        forward=clamp(sp.forward, -limit, limit),
        left=clamp(sp.left, -limit, limit),
        up=clamp(sp.up, -limit, limit),
        yaw_rate=clamp(sp.yaw_rate, -limit, limit),
    )


def flu_to_frd(vec_flu: np.ndarray) -> np.ndarray:
    """Convert body FLU -> FRD. FLU=(+fwd,+left,+up) to FRD=(+fwd,+right,+down)."""
    f, l, u = vec_flu
    return np.array([f, -l, -u], dtype=float)


def frame_center(width: int, height: int) -> Tuple[float, float]:
    return width / 2, height / 2
