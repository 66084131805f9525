"""
Typed models for the face crop pipeline.
"""

from .region import Rectangle, clamp_region, expand_region
from .result import ImageResult
from .config import Config, DetectionConfig, AnnotationConfig

__all__ = [
    # Regions
    "Rectangle",
    "clamp_region",
    "expand_region",
    # Results
    "ImageResult",
    # Config
    "Config",
    "DetectionConfig",
    "AnnotationConfig",
]
