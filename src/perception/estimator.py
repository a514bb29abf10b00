"""
estimator.py
------------
Turns the selected contour into a `Detection` (centroid + apparent area).

The contour is rasterized filled into a blank frame-sized mask and the
binary image moments of that raster are used:

    area = m00,  x = m10 / m00,  y = m01 / m00

Rasterizing (instead of using the polygon moments directly) counts boundary
pixels as part of the blob, so the area is a pixel count.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

from schemas import Detection


def estimate(region: Optional[np.ndarray], min_pixels: float,
             frame_shape: Tuple[int, int]) -> Detection:
    """
    Estimate the centroid and area of a region.

    Parameters
    ----------
    region : np.ndarray or None
        Contour returned by `select_largest`, or None.
    min_pixels : float
        Minimum area in pixels (already scaled, see `AreaRange.min_pixels`).
        The region must be strictly larger to count as found.
    frame_shape : (int, int)
        (height, width) of the mask the region came from.

    Returns
    -------
    Detection
        found=False with area=0 when there is no region; found=False with the
        measured area when the region is too small; otherwise found=True with
        the truncated integer centroid.
    """
    if region is None:
        return Detection(found=False)

    height, width = frame_shape[:2]
    filled = np.zeros((height, width), dtype=np.uint8)
    cv2.drawContours(filled, [region], -1, 255, thickness=cv2.FILLED)

    m = cv2.moments(filled, binaryImage=True)
    area = float(m["m00"])

    if area <= min_pixels or area <= 0.0:
        return Detection(found=False, area=area)

    x = int(m["m10"] / area)
    y = int(m["m01"] / area)
    return Detection(found=True, x=x, y=y, area=area)
