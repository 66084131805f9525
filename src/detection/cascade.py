"""
Haar cascade face detector backed by OpenCV.
"""

from __future__ import annotations

import logging
import os
from typing import List, Tuple

import cv2
import numpy as np

from models.region import Rectangle
from ops.errors import ConfigError, DetectionError

from .base import FaceDetector


def resolve_classifier_path(path: str) -> str:
    """
    Locate the cascade definition file.

    The path is used as given when it exists. A bare file name is also looked
    up in the cascade directory bundled with opencv-python.

    Raises:
        ConfigError: If the file cannot be found.
    """
    if os.path.isfile(path):
        return path

    if os.path.basename(path) == path:
        bundled_dir = getattr(getattr(cv2, "data", None), "haarcascades", None)
        if bundled_dir:
            bundled = os.path.join(bundled_dir, path)
            if os.path.isfile(bundled):
                logging.debug(f"Using bundled cascade: {bundled}")
                return bundled

    raise ConfigError(f"Cascade classifier file not found: {path}")


class CascadeFaceDetector(FaceDetector):
    """
    Frontal face detector using cv2.CascadeClassifier.

    The classifier is loaded once and is read-only afterwards.
    """

    def __init__(
        self,
        classifier_path: str,
        scale_factor: float = 1.1,
        min_neighbors: int = 5,
        min_size: Tuple[int, int] = (30, 30),
    ) -> None:
        self.classifier_path = resolve_classifier_path(classifier_path)
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_size = tuple(min_size)

        self._classifier = cv2.CascadeClassifier()
        try:
            loaded = self._classifier.load(self.classifier_path)
        except cv2.error as e:
            raise ConfigError(f"Error loading Haar cascade file {self.classifier_path}: {e}") from e
        if not loaded or self._classifier.empty():
            raise ConfigError(f"Error loading Haar cascade file: {self.classifier_path}")
        logging.info(f"Cascade classifier loaded from {self.classifier_path}")

    @classmethod
    def from_config(cls, config) -> "CascadeFaceDetector":
        """Build from a models.config.Config."""
        return cls(
            classifier_path=config.classifier_path,
            scale_factor=config.detection.scale_factor,
            min_neighbors=config.detection.min_neighbors,
            min_size=config.detection.min_size,
        )

    def detect(self, raster: np.ndarray) -> List[Rectangle]:
        gray = self._to_gray(raster)
        try:
            faces = self._classifier.detectMultiScale(
                gray,
                scaleFactor=self.scale_factor,
                minNeighbors=self.min_neighbors,
                flags=0,
                minSize=self.min_size,
            )
        except cv2.error as e:
            raise DetectionError(f"Face detection failed: {e}") from e

        if faces is None or len(faces) == 0:
            return []
        return [Rectangle.from_xywh(x, y, w, h) for (x, y, w, h) in faces]

    @staticmethod
    def _to_gray(raster: np.ndarray) -> np.ndarray:
        if raster.ndim == 2:
            return raster
        channels = raster.shape[2]
        if channels == 1:
            return raster[:, :, 0]
        try:
            if channels == 4:
                return cv2.cvtColor(raster, cv2.COLOR_BGRA2GRAY)
            if channels == 3:
                return cv2.cvtColor(raster, cv2.COLOR_BGR2GRAY)
        except cv2.error as e:
            raise DetectionError(f"Grayscale conversion failed: {e}") from e
        raise DetectionError(f"Unsupported channel count for detection: {channels}")
