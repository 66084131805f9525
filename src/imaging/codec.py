"""
Lossless encoding and file output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ops.errors import EncodeError

OUTPUT_EXTENSION = ".webp"

# OpenCV switches the WebP encoder to lossless mode for quality above 100.
WEBP_LOSSLESS_QUALITY = 101


class ImageEncoder:
    """Encoder interface: serialize a raster to bytes."""

    extension = OUTPUT_EXTENSION

    def encode(self, raster: np.ndarray) -> bytes:
        raise NotImplementedError


class WebpEncoder(ImageEncoder):
    """Lossless WebP encoder."""

    def encode(self, raster: np.ndarray) -> bytes:
        if raster is None or raster.size == 0:
            raise EncodeError("Cannot encode an empty raster")
        if raster.dtype != np.uint8:
            raise EncodeError(f"Unsupported pixel type for WebP: {raster.dtype}")
        channels = 1 if raster.ndim == 2 else raster.shape[2]
        if raster.ndim not in (2, 3) or channels not in (1, 3, 4):
            raise EncodeError(f"Unsupported pixel format for WebP: shape={raster.shape}")

        try:
            ok, buf = cv2.imencode(
                OUTPUT_EXTENSION,
                raster,
                [int(cv2.IMWRITE_WEBP_QUALITY), WEBP_LOSSLESS_QUALITY],
            )
        except cv2.error as e:
            raise EncodeError(f"Failed to encode image to WebP: {e}") from e
        if not ok:
            raise EncodeError("Failed to encode image to WebP")
        return buf.tobytes()


def write_image(path: Union[str, Path], data: bytes) -> None:
    """
    Write encoded bytes, creating or overwriting the file.

    Raises:
        OSError: If the path cannot be written.
    """
    Path(path).write_bytes(data)
    logging.debug(f"Wrote {len(data)} bytes to {path}")
