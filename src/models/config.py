"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_CLASSIFIER = "haarcascade_frontalface_default.xml"
DEFAULT_EXTENSIONS = [".jpg", ".jpeg", ".png", ".bmp", ".webp", ".tif", ".tiff"]


@dataclass
class DetectionConfig:
    """Cascade classifier parameters."""
    scale_factor: float = 1.1
    min_neighbors: int = 5
    min_size: Tuple[int, int] = (30, 30)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectionConfig":
        return cls(
            scale_factor=float(d.get("scale_factor", 1.1)),
            min_neighbors=int(d.get("min_neighbors", 5)),
            min_size=tuple(d.get("min_size", (30, 30))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scale_factor": self.scale_factor,
            "min_neighbors": self.min_neighbors,
            "min_size": list(self.min_size),
        }


@dataclass
class AnnotationConfig:
    """Outline drawn around each face region (BGR colour)."""
    color: Tuple[int, int, int] = (0, 0, 255)
    thickness: int = 3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnnotationConfig":
        return cls(
            color=tuple(d.get("color", (0, 0, 255))),
            thickness=int(d.get("thickness", 3)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": list(self.color),
            "thickness": self.thickness,
        }


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure. It is
    read-only once the run has started.
    """
    input_dir: str = "input"
    output_dir: str = "output"
    target_width: int = 1024
    target_height: int = 1024
    classifier_path: str = DEFAULT_CLASSIFIER
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)
    log_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            input_dir=d.get("input_dir", "input"),
            output_dir=d.get("output_dir", "output"),
            target_width=int(d.get("target_width", 1024)),
            target_height=int(d.get("target_height", 1024)),
            classifier_path=d.get("classifier_path", DEFAULT_CLASSIFIER),
            extensions=[e.lower() for e in d.get("extensions", DEFAULT_EXTENSIONS)],
            detection=DetectionConfig.from_dict(d.get("detection") or {}),
            annotation=AnnotationConfig.from_dict(d.get("annotation") or {}),
            log_path=d.get("log_path"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or logging)."""
        return {
            "input_dir": self.input_dir,
            "output_dir": self.output_dir,
            "target_width": self.target_width,
            "target_height": self.target_height,
            "classifier_path": self.classifier_path,
            "extensions": list(self.extensions),
            "detection": self.detection.to_dict(),
            "annotation": self.annotation.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
