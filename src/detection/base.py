"""
Detection interface.

The pipeline only needs boxes in working-raster coordinates, so detectors
are kept behind this narrow interface and tests can substitute fakes that
return fixed rectangles.
"""

from __future__ import annotations

from typing import List

import numpy as np

from models.region import Rectangle


class FaceDetector:
    """Detector interface returning face boxes in pixel-space, in detector order."""

    def detect(self, raster: np.ndarray) -> List[Rectangle]:
        raise NotImplementedError
