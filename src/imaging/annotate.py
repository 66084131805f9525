"""
Drawing and cropping face regions on the working raster.
"""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np

from models.region import Rectangle


def draw_region(
    raster: np.ndarray,
    rect: Rectangle,
    color: Tuple[int, int, int] = (0, 0, 255),
    thickness: int = 3,
) -> np.ndarray:
    """
    Draw an unfilled rectangle outline in place.

    The outline runs along the outermost pixels of rect, so a crop of the
    same rect carries all four edges. Returns the same array that was
    passed in. Empty rectangles draw nothing.
    """
    if rect.area == 0:
        return raster
    # cv2.rectangle treats its second corner as inclusive; Rectangle right/bottom are exclusive.
    cv2.rectangle(
        raster,
        (rect.left, rect.top),
        (rect.right - 1, rect.bottom - 1),
        tuple(int(c) for c in color),
        thickness,
    )
    return raster


def crop_region(raster: np.ndarray, rect: Rectangle) -> np.ndarray:
    """Return a view of the raster bounded by rect (no copy, no resampling)."""
    return raster[rect.top:rect.bottom, rect.left:rect.right]
