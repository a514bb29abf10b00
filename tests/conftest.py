import copy

import cv2
import numpy as np
import pytest

import config as C
from schemas import CameraMode, ColorRange, ModeConfig

# Matches white (any hue, low saturation, high value), rejects black
WHITE = ColorRange(hue_low=0, hue_high=179, sat_low=0, sat_high=30, val_low=200, val_high=255)


def blank_frame(width=C.FRAME_WIDTH, height=C.FRAME_HEIGHT):
    return np.zeros((height, width, 3), dtype=np.uint8)


def disc_frame(center, radius, width=C.FRAME_WIDTH, height=C.FRAME_HEIGHT):
    """Black BGR frame with one filled white disc."""
    frame = blank_frame(width, height)
    cv2.circle(frame, center, radius, (255, 255, 255), thickness=-1)
    return frame


def disc_mask(center, radius, width=C.FRAME_WIDTH, height=C.FRAME_HEIGHT):
    mask = np.zeros((height, width), dtype=np.uint8)
    cv2.circle(mask, center, radius, 255, thickness=-1)
    return mask


class MemoryConfigStore:
    """Dict-backed store; hands out copies so callers cannot alias records."""

    def __init__(self, records=None):
        self.records = dict(records or {})
        self.saves = []

    def load(self, mode):
        cfg = self.records.get(mode)
        return copy.deepcopy(cfg) if cfg is not None else ModeConfig()

    def save(self, mode, cfg):
        self.saves.append(mode)
        self.records[mode] = copy.deepcopy(cfg)


class RecordingSink:
    def __init__(self):
        self.velocities = []
        self.commands = []
        self.airborne = False

    def set_velocity(self, sp):
        self.velocities.append(copy.copy(sp))

    def takeoff(self):
        self.commands.append("takeoff")
        self.airborne = True

    def land(self):
        self.commands.append("land")
        self.airborne = False

    def calibrate(self):
        self.commands.append("calibrate")

    def flat_trim(self):
        self.commands.append("flat_trim")

    def emergency_stop(self):
        self.commands.append("emergency_stop")
        self.airborne = False


@pytest.fixture
def white_config():
    return ModeConfig(color=copy.deepcopy(WHITE))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def memory_store(white_config):
    return MemoryConfigStore({
        CameraMode.FRONT: white_config,
        CameraMode.BOTTOM: copy.deepcopy(white_config),
    })
