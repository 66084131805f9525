"""
Face detection backends.
"""

from .base import FaceDetector
from .cascade import CascadeFaceDetector, resolve_classifier_path

__all__ = ['FaceDetector', 'CascadeFaceDetector', 'resolve_classifier_path']
