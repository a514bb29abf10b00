"""
contours.py
-----------
Picks the single region the follower acts on: the largest external contour
of the segmentation mask.

Only outer boundaries are considered (RETR_EXTERNAL), so holes inside a blob
never compete with the blob itself.
"""

from typing import Optional

import cv2
import numpy as np


def select_largest(mask: np.ndarray) -> Optional[np.ndarray]:
    """
    Return the external contour enclosing the greatest area.

    Parameters
    ----------
    mask : np.ndarray
        Binary uint8 mask, shape (H, W).

    Returns
    -------
    np.ndarray or None
        The selected contour (N, 1, 2) int32 points, or None when the mask
        has no foreground at all. On equal areas the first contour in
        OpenCV's scan order wins.
    """
    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    if len(contours) == 0:
        return None

    best = contours[0]
    best_area = cv2.contourArea(best)
    for contour in contours[1:]:
        area = cv2.contourArea(contour)
        if area > best_area:  # strict: ties keep the earlier contour
            best, best_area = contour, area
    return best
