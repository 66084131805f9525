"""
Per-image processing outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ImageResult:
    """
    Outcome of running the pipeline on one input image.

    Attributes:
        input_path: Path of the source image.
        output_path: Annotated image path. Only written when has_face is True.
        has_face: Whether at least one face was detected.
        face_paths: Crop files written, in detection order.
    """
    input_path: str
    output_path: Optional[str] = None
    has_face: bool = False
    face_paths: List[str] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.face_paths)

    def to_log_record(self) -> Dict[str, Any]:
        return {
            "input_path": self.input_path,
            "output_path": self.output_path,
            "has_face": self.has_face,
        }
