"""
Batch driver: runs the face crop pipeline over every image in a directory.

Per-file failures are logged and counted; the batch moves on to the next
file. Only failing to enumerate the input directory or to create the output
directory stops the run.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ops.errors import DecodeError, DetectionError, EncodeError
from pipeline.processor import FaceCropPipeline

# Errors that only affect the file being processed.
PER_FILE_ERRORS = (DecodeError, DetectionError, EncodeError, OSError)


@dataclass
class BatchConfig:
    """
    Attributes:
        input_dir: Directory to enumerate.
        output_dir: Directory for annotated images and crops.
        extensions: Lower-case file suffixes (with dot) to pick up.
    """
    input_dir: str
    output_dir: str
    extensions: List[str] = field(default_factory=list)


@dataclass
class BatchStats:
    """Runtime statistics for a batch run."""
    files_seen: int = 0
    processed: int = 0
    with_faces: int = 0
    no_face: int = 0
    faces: int = 0
    errors: int = 0
    start_time: float = field(default_factory=time.time)
    elapsed: float = 0.0


def list_images(input_dir: str, extensions: Iterable[str]) -> List[str]:
    """
    Return image files directly inside input_dir, sorted by name.

    Raises:
        OSError: If the directory cannot be listed.
    """
    wanted = {e.lower() for e in extensions}
    paths = []
    with os.scandir(input_dir) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if wanted and os.path.splitext(entry.name)[1].lower() not in wanted:
                logging.debug(f"Skipping non-image file: {entry.path}")
                continue
            paths.append(entry.path)
    return sorted(paths)


class BatchRunner:
    """
    Sequential batch processing.

    Example:
        runner = BatchRunner(pipeline, BatchConfig("photos", "out", [".jpg"]))
        stats = runner.run()
    """

    def __init__(self, pipeline: FaceCropPipeline, config: BatchConfig):
        self.pipeline = pipeline
        self.config = config
        self.stats = BatchStats()

    def run(self) -> BatchStats:
        """
        Process every image in the input directory.

        Raises:
            OSError: If the input directory cannot be read or the output
                directory cannot be created.
        """
        self.stats = BatchStats()

        os.makedirs(self.config.output_dir, exist_ok=True)
        paths = list_images(self.config.input_dir, self.config.extensions)
        logging.info(f"Batch started: {len(paths)} file(s) in {self.config.input_dir}")

        # Face crops are named from the stem, so a second file with the same
        # stem would overwrite the first one's crops.
        stems: Dict[str, str] = {}
        for path in paths:
            self.stats.files_seen += 1
            stem = os.path.splitext(os.path.basename(path))[0]
            if stem in stems:
                self.stats.errors += 1
                logging.error(f"Skipping {path}: face crops would overwrite those of {stems[stem]}")
                continue
            stems[stem] = path
            self._process_file(path)

        self.stats.elapsed = time.time() - self.stats.start_time
        logging.info(
            f"Batch finished: processed={self.stats.processed}, with_faces={self.stats.with_faces}, "
            f"faces={self.stats.faces}, errors={self.stats.errors}, elapsed={self.stats.elapsed:.1f}s"
        )
        return self.stats

    def _process_file(self, path: str) -> None:
        try:
            result = self.pipeline.process_image(path)
        except PER_FILE_ERRORS as e:
            self.stats.errors += 1
            logging.error(f"Failed to process {path}: {e}")
            return

        self.stats.processed += 1
        if result.has_face:
            self.stats.with_faces += 1
            self.stats.faces += result.face_count
        else:
            self.stats.no_face += 1
