"""
Raster resizing.

All face geometry downstream is expressed in the coordinate space of the
resized (working) raster.
"""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np

from ops.errors import ConfigError


class Resizer:
    """Resizer interface: fit a raster into a width x height box."""

    def resize(self, raster: np.ndarray, width: int, height: int) -> np.ndarray:
        raise NotImplementedError


def thumbnail_size(src_width: int, src_height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Compute the shrink-to-fit size preserving aspect ratio.

    Never upscales. Width is fitted first, then height; each side is at
    least one pixel.
    """
    if max_width <= 0 or max_height <= 0:
        raise ConfigError(f"Target dimensions must be positive, got {max_width}x{max_height}")

    if src_width <= max_width and src_height <= max_height:
        return src_width, src_height

    new_width, new_height = src_width, src_height
    if src_width > max_width:
        new_height = max(1, src_height * max_width // src_width)
        new_width = max_width
    if new_height > max_height:
        new_width = max(1, new_width * max_height // new_height)
        new_height = max_height
    return new_width, new_height


class ThumbnailResizer(Resizer):
    """Aspect-preserving shrink-to-fit using Lanczos interpolation."""

    def __init__(self, interpolation: int = cv2.INTER_LANCZOS4) -> None:
        self.interpolation = interpolation

    def resize(self, raster: np.ndarray, width: int, height: int) -> np.ndarray:
        src_height, src_width = raster.shape[:2]
        new_width, new_height = thumbnail_size(src_width, src_height, width, height)
        if (new_width, new_height) == (src_width, src_height):
            return raster.copy()
        return cv2.resize(raster, (new_width, new_height), interpolation=self.interpolation)
