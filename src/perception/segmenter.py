"""
segmenter.py
------------
Color-space segmentation: the first step of the perception pipeline.

- Takes an HSV frame (converted once per cycle from the BGR camera frame).
- Thresholds each channel against inclusive [low, high] bounds.
- Closes the mask (dilate then erode, 3x3) to drop speckle and fill
  pinholes before contours are extracted.

Notes
-----
• OpenCV HSV: hue is 0–179, saturation/value are 0–255.
• A range with low > high on any channel simply yields an empty mask.
"""

import cv2
import numpy as np

from schemas import ColorRange

# 3x3 rectangular structuring element for the closing step
_CLOSE_KERNEL = cv2.getStructuringElement(cv2.MORPH_RECT, (3, 3))


def to_hsv(frame_bgr: np.ndarray) -> np.ndarray:
    """Convert an OpenCV BGR frame to HSV."""
    return cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2HSV)


def segment(hsv_frame: np.ndarray, color_range: ColorRange) -> np.ndarray:
    """
    Threshold an HSV frame into a binary mask.

    Parameters
    ----------
    hsv_frame : np.ndarray
        HSV image, shape (H, W, 3), uint8.
    color_range : ColorRange
        Inclusive per-channel bounds.

    Returns
    -------
    np.ndarray
        uint8 mask, shape (H, W): 255 where all three channels are in range
        (after closing), 0 elsewhere.
    """
    mask = cv2.inRange(hsv_frame, color_range.lower(), color_range.upper())

    # Closing = dilate -> erode; removes small holes and joins speckle
    return cv2.morphologyEx(mask, cv2.MORPH_CLOSE, _CLOSE_KERNEL)
