"""
Raster I/O, resizing and annotation on top of OpenCV.
"""

from .loader import load_image
from .resize import Resizer, ThumbnailResizer, thumbnail_size
from .codec import ImageEncoder, WebpEncoder, write_image, OUTPUT_EXTENSION
from .annotate import draw_region, crop_region

__all__ = [
    "load_image",
    "Resizer",
    "ThumbnailResizer",
    "thumbnail_size",
    "ImageEncoder",
    "WebpEncoder",
    "write_image",
    "OUTPUT_EXTENSION",
    "draw_region",
    "crop_region",
]
