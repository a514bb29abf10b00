"""
config_store.py
---------------
Durable per-camera configuration, stored as OpenCV FileStorage XML.

One file per camera mode (names from config.py), with the keys:

    HueLOW HueHIGH SaturationLOW SaturationHIGH ValueLOW ValueHIGH
    AreaMIN AreaMAX DeadzoneX DeadzoneY

Loading never fails: a missing file, a missing key, a non-numeric node or an
unparsable file all fall back to the defaults in `schemas` (permissive color
bounds, zero-size deadzone), with a warning logged.
"""

import logging
import os
from typing import Dict, Tuple

import cv2

import config as C
from schemas import AreaRange, CameraMode, ColorRange, DeadzoneSize, ModeConfig

logger = logging.getLogger(__name__)

# FileStorage key -> (section attribute on ModeConfig, field name)
_KEYS: Dict[str, Tuple[str, str]] = {
    "HueLOW": ("color", "hue_low"),
    "HueHIGH": ("color", "hue_high"),
    "SaturationLOW": ("color", "sat_low"),
    "SaturationHIGH": ("color", "sat_high"),
    "ValueLOW": ("color", "val_low"),
    "ValueHIGH": ("color", "val_high"),
    "AreaMIN": ("area", "min_area"),
    "AreaMAX": ("area", "max_area"),
    "DeadzoneX": ("deadzone", "width"),
    "DeadzoneY": ("deadzone", "height"),
}

_FILES = {
    CameraMode.FRONT: C.FRONT_CONFIG_FILE,
    CameraMode.BOTTOM: C.BOTTOM_CONFIG_FILE,
}


def default_mode_config() -> ModeConfig:
    return ModeConfig(color=ColorRange(), area=AreaRange(), deadzone=DeadzoneSize())


class FileStorageConfigStore:
    """
    Get/set provider for the two per-mode records.

    Parameters
    ----------
    directory : str, optional
        Folder holding the XML files. Created on first save.
    """

    def __init__(self, directory: str = C.CONFIG_DIR):
        self.directory = directory

    def path_for(self, mode: CameraMode) -> str:
        return os.path.join(self.directory, _FILES[mode])

    def load(self, mode: CameraMode) -> ModeConfig:
        cfg = default_mode_config()
        path = self.path_for(mode)

        if not os.path.isfile(path):
            logger.warning("No %s config at %s, using defaults", mode.value, path)
            return cfg

        # open() rather than the constructor, so parse failures surface as cv2.error
        fs = cv2.FileStorage()
        try:
            fs.open(path, cv2.FILE_STORAGE_READ)
        except cv2.error as e:
            logger.warning("Could not parse %s (%s), using defaults", path, e)
            return cfg

        if not fs.isOpened():
            logger.warning("Could not open %s, using defaults", path)
            return cfg

        try:
            for key, (section, name) in _KEYS.items():
                node = fs.getNode(key)
                if node.empty() or not (node.isInt() or node.isReal()):
                    logger.warning("%s: missing or non-numeric %s, keeping default", path, key)
                    continue
                setattr(getattr(cfg, section), name, int(node.real()))
        finally:
            fs.release()

        logger.debug("Loaded %s config from %s: %s", mode.value, path, cfg)
        return cfg

    def save(self, mode: CameraMode, cfg: ModeConfig):
        os.makedirs(self.directory, exist_ok=True)
        path = self.path_for(mode)

        fs = cv2.FileStorage(path, cv2.FILE_STORAGE_WRITE)
        try:
            for key, (section, name) in _KEYS.items():
                fs.write(key, int(getattr(getattr(cfg, section), name)))
        finally:
            fs.release()
        logger.debug("Saved %s config to %s", mode.value, path)
