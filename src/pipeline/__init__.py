"""
Pipeline module for the face crop tool.

The pipeline orchestrates the full processing flow:
- Image loading and resizing to the working raster
- Face detection
- Region expansion, annotation and cropping
- Lossless output of the annotated image and face crops
"""

from .processor import FaceCropPipeline, PipelineConfig, annotated_output_name, face_output_name
from .batch import BatchRunner, BatchConfig, BatchStats, list_images

__all__ = [
    "FaceCropPipeline",
    "PipelineConfig",
    "annotated_output_name",
    "face_output_name",
    "BatchRunner",
    "BatchConfig",
    "BatchStats",
    "list_images",
]
