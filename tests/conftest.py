"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from detection.base import FaceDetector
from imaging.codec import ImageEncoder
from imaging.resize import Resizer
from models.region import Rectangle


class FakeDetector(FaceDetector):
    """Returns a fixed list of rectangles and records the rasters it saw."""

    def __init__(self, faces=None):
        self.faces = list(faces or [])
        self.calls = []

    def detect(self, raster):
        self.calls.append(raster.shape)
        return list(self.faces)


class IdentityResizer(Resizer):
    """Returns a copy of the raster unchanged."""

    def resize(self, raster, width, height):
        return raster.copy()


class RecordingEncoder(ImageEncoder):
    """Keeps a copy of every raster it encodes and returns placeholder bytes."""

    def __init__(self):
        self.rasters = []

    def encode(self, raster):
        self.rasters.append(raster.copy())
        return f"raster-{len(self.rasters)}".encode()


@pytest.fixture
def fake_detector():
    return FakeDetector([Rectangle(100, 100, 200, 220)])


@pytest.fixture
def recording_encoder():
    return RecordingEncoder()


@pytest.fixture
def blank_image():
    """A 1024x1024 black BGR raster."""
    return np.zeros((1024, 1024, 3), dtype=np.uint8)


@pytest.fixture
def image_dir(tmp_path):
    """Directory with two small PNG images and one non-image file."""
    import cv2

    d = tmp_path / "input"
    d.mkdir()
    img = np.full((120, 160, 3), 128, dtype=np.uint8)
    cv2.imwrite(str(d / "a.png"), img)
    cv2.imwrite(str(d / "b.png"), img)
    (d / "notes.txt").write_text("not an image")
    return d


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
input_dir: "input"
output_dir: "output"
target_width: 1024
target_height: 1024
classifier_path: "haarcascade_frontalface_default.xml"
extensions: [".jpg", ".png"]

detection:
  scale_factor: 1.1
  min_neighbors: 5
  min_size: [30, 30]

annotation:
  color: [0, 0, 255]
  thickness: 3

log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "input_dir": "input",
        "output_dir": "output",
        "target_width": 1024,
        "target_height": 1024,
        "classifier_path": "haarcascade_frontalface_default.xml",
        "extensions": [".jpg", ".png"],
        "detection": {
            "scale_factor": 1.1,
            "min_neighbors": 5,
            "min_size": [30, 30],
        },
        "annotation": {
            "color": [0, 0, 255],
            "thickness": 3,
        },
        "log_path": None,
        "log_level": "INFO",
    }
