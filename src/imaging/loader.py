"""
Image loading.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ops.errors import DecodeError


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Read an image file into a BGR uint8 raster.

    Raises:
        OSError: If the file cannot be read.
        DecodeError: If the bytes are not a decodable image.
    """
    data = Path(path).read_bytes()
    if not data:
        raise DecodeError(f"Empty image file: {path}")

    try:
        raster = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise DecodeError(f"Error reading image {path}: {e}") from e

    if raster is None or raster.size == 0:
        raise DecodeError(f"Error reading image: {path}")
    return raster
