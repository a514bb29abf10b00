"""
camera.py
---------
Frame source over cv2.VideoCapture (device index or video file).

Failing to open the source is fatal and raised before the control loop
starts; there is no mid-loop recovery.
"""

import logging
from typing import Optional, Union

import cv2
import numpy as np

import config as C

logger = logging.getLogger(__name__)


class VideoFrameSource:
    def __init__(self, source: Union[int, str], width: int = C.FRAME_WIDTH,
                 height: int = C.FRAME_HEIGHT):
        self.width = width
        self.height = height

        # "0" on the command line means camera index 0, anything else is a path
        try:
            source = int(source)
        except ValueError:
            pass
        self.cap = cv2.VideoCapture(source)
        if not self.cap.isOpened():
            raise RuntimeError(f"Could not open video source: {source}")

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        logger.info("Opened video source %r", source)

    def next_frame(self) -> Optional[np.ndarray]:
        """Blocking read. Returns a BGR frame of the fixed size, or None at end of stream."""
        ret, frame = self.cap.read()
        if not ret:
            return None
        if frame.shape[1] != self.width or frame.shape[0] != self.height:
            frame = cv2.resize(frame, (self.width, self.height))
        return frame

    def release(self):
        self.cap.release()
