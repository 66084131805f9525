"""
Per-image face crop pipeline.

Load -> Resize -> Detect -> (Expand, Annotate, Crop, Encode crop)* -> Encode main.

Each detection is drawn onto the working raster before its crop is taken,
so a crop shows its own outline and the outlines of earlier detections that
overlap it. Crops are encoded immediately, so later outlines never appear in
earlier crops.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from detection.base import FaceDetector
from imaging.annotate import crop_region, draw_region
from imaging.codec import ImageEncoder, write_image
from imaging.loader import load_image
from imaging.resize import Resizer
from models.config import Config
from models.region import expand_region
from models.result import ImageResult


@dataclass
class PipelineConfig:
    """
    Settings the per-image pipeline reads.

    Attributes:
        target_width: Working raster bounding box width.
        target_height: Working raster bounding box height.
        output_dir: Directory for outputs when no explicit output path is given.
        color: Outline colour (BGR).
        thickness: Outline stroke width.
    """
    target_width: int = 1024
    target_height: int = 1024
    output_dir: str = "."
    color: Tuple[int, int, int] = (0, 0, 255)
    thickness: int = 3

    @classmethod
    def from_config(cls, config: Config) -> "PipelineConfig":
        return cls(
            target_width=config.target_width,
            target_height=config.target_height,
            output_dir=config.output_dir,
            color=config.annotation.color,
            thickness=config.annotation.thickness,
        )


def annotated_output_name(input_path: str, extension: str) -> str:
    """output_<filename><ext> for the annotated image, keeping the input's own extension."""
    return f"output_{os.path.basename(input_path)}{extension}"


def face_output_name(input_path: str, index: int, extension: str) -> str:
    """<stem>_face_<index><ext>, index is 1-based in detector order."""
    stem = os.path.splitext(os.path.basename(input_path))[0]
    return f"{stem}_face_{index}{extension}"


class FaceCropPipeline:
    """
    Runs detection, annotation and cropping for one image at a time.

    The detector, resizer and encoder are injected so tests can use fakes.
    """

    def __init__(
        self,
        detector: FaceDetector,
        resizer: Resizer,
        encoder: ImageEncoder,
        config: PipelineConfig,
        loader: Callable[[str], np.ndarray] = load_image,
    ) -> None:
        self.detector = detector
        self.resizer = resizer
        self.encoder = encoder
        self.config = config
        self.loader = loader

    def process_image(self, input_path: str, output_path: Optional[str] = None) -> ImageResult:
        """
        Process one image.

        Args:
            input_path: Source image.
            output_path: Annotated image path. Defaults to
                output_dir/output_<filename><ext>. Face crops go to the same directory.

        Returns:
            ImageResult. With no detections nothing is written.

        Raises:
            OSError: Input unreadable or output unwritable.
            DecodeError: Input is not a decodable image.
            DetectionError: The detector failed.
            EncodeError: A raster could not be encoded.
        """
        extension = self.encoder.extension
        if output_path is None:
            output_path = os.path.join(
                self.config.output_dir, annotated_output_name(input_path, extension)
            )
        result = ImageResult(input_path=str(input_path), output_path=str(output_path))

        working = self._load_working_raster(input_path)
        faces = self.detector.detect(working)
        if not faces:
            logging.info(f"No faces detected in {input_path}")
            return result

        result.has_face = True
        height, width = working.shape[:2]
        out_dir = os.path.dirname(output_path)
        for index, face in enumerate(faces, start=1):
            region = expand_region(face, width, height)
            draw_region(working, region, self.config.color, self.config.thickness)

            face_path = os.path.join(out_dir, face_output_name(input_path, index, extension))
            write_image(face_path, self.encoder.encode(crop_region(working, region)))
            result.face_paths.append(face_path)
            logging.debug(f"Face {index} of {input_path}: {face.as_tuple()} -> {region.as_tuple()}")

        write_image(output_path, self.encoder.encode(working))
        logging.info(f"Processed {input_path}: {len(faces)} face(s) -> {output_path}")
        return result

    def _load_working_raster(self, input_path: str) -> np.ndarray:
        # The decoded original is only referenced here; numpy frees it when this returns.
        original = self.loader(input_path)
        return self.resizer.resize(original, self.config.target_width, self.config.target_height)
