"""
mode_state.py
-------------
Tracks which camera is active and which per-mode configuration is in effect.

Switching mode is the only moment configuration crosses the store boundary
(besides shutdown): the outgoing mode's values are saved, the incoming mode's
values are loaded, and listeners (the trackbar window, the deadzone overlay)
are told to rebuild for the new mode.
"""

import logging
from typing import Callable, List

from schemas import CameraMode, ModeConfig

logger = logging.getLogger(__name__)


class ModeState:
    """
    Owner of the active `CameraMode` and its `ModeConfig`.

    Parameters
    ----------
    store : object
        Anything with `load(mode) -> ModeConfig` and `save(mode, cfg)`.
    mode : CameraMode, optional
        Starting mode. Its configuration is loaded immediately.
    """

    def __init__(self, store, mode: CameraMode = CameraMode.FRONT):
        self.store = store
        self.mode = mode
        self.config: ModeConfig = store.load(mode)
        self._listeners: List[Callable[[CameraMode, ModeConfig], None]] = []

    def add_listener(self, callback: Callable[[CameraMode, ModeConfig], None]):
        """Register a callback run after every mode switch."""
        self._listeners.append(callback)

    def toggle(self) -> CameraMode:
        """Save current config, flip the mode, load the other config."""
        self.store.save(self.mode, self.config)
        self.mode = self.mode.other()
        self.config = self.store.load(self.mode)
        logger.info("Camera mode -> %s", self.mode.value.upper())

        for callback in self._listeners:
            callback(self.mode, self.config)
        return self.mode

    def flush(self):
        """Persist the active config (end of run)."""
        self.store.save(self.mode, self.config)
