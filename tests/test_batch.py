"""
Tests for the batch driver.
"""

import logging
import os

import numpy as np
import pytest

from conftest import FakeDetector, IdentityResizer, RecordingEncoder
from models.region import Rectangle
from pipeline.batch import BatchConfig, BatchRunner, BatchStats, list_images
from pipeline.processor import FaceCropPipeline, PipelineConfig

EXTENSIONS = [".png", ".jpg"]


def _make_runner(input_dir, output_dir, faces):
    pipeline = FaceCropPipeline(
        detector=FakeDetector(faces),
        resizer=IdentityResizer(),
        encoder=RecordingEncoder(),
        config=PipelineConfig(output_dir=str(output_dir)),
    )
    return BatchRunner(pipeline, BatchConfig(str(input_dir), str(output_dir), EXTENSIONS))


class TestListImages:
    def test_filters_by_extension_and_sorts(self, image_dir):
        (image_dir / "C.JPG").write_bytes(b"x")

        paths = list_images(str(image_dir), EXTENSIONS)

        assert [os.path.basename(p) for p in paths] == ["C.JPG", "a.png", "b.png"]

    def test_skips_subdirectories(self, image_dir):
        (image_dir / "nested.png").mkdir()

        paths = list_images(str(image_dir), EXTENSIONS)

        assert "nested.png" not in [os.path.basename(p) for p in paths]

    def test_empty_extension_list_takes_all_files(self, image_dir):
        assert len(list_images(str(image_dir), [])) == 3

    def test_missing_directory_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            list_images(str(tmp_path / "missing"), EXTENSIONS)


class TestBatchRunner:
    def test_empty_directory(self, tmp_path):
        input_dir = tmp_path / "in"
        input_dir.mkdir()

        stats = _make_runner(input_dir, tmp_path / "out", [Rectangle(0, 0, 10, 10)]).run()

        assert stats.files_seen == 0
        assert stats.processed == 0
        assert stats.errors == 0
        assert (tmp_path / "out").is_dir()

    def test_processes_every_image(self, image_dir, tmp_path):
        out = tmp_path / "out"

        stats = _make_runner(image_dir, out, [Rectangle(10, 10, 40, 40), Rectangle(60, 20, 90, 50)]).run()

        assert stats.files_seen == 2
        assert stats.processed == 2
        assert stats.with_faces == 2
        assert stats.faces == 4
        assert stats.errors == 0
        assert sorted(os.listdir(out)) == [
            "a_face_1.webp", "a_face_2.webp",
            "b_face_1.webp", "b_face_2.webp",
            "output_a.png.webp", "output_b.png.webp",
        ]

    def test_no_face_images_produce_no_output(self, image_dir, tmp_path):
        out = tmp_path / "out"

        stats = _make_runner(image_dir, out, []).run()

        assert stats.processed == 2
        assert stats.no_face == 2
        assert stats.with_faces == 0
        assert os.listdir(out) == []

    def test_same_stem_different_extension_is_reported_not_overwritten(self, image_dir, tmp_path, caplog):
        import cv2

        cv2.imwrite(str(image_dir / "a.jpg"), np.full((120, 160, 3), 64, dtype=np.uint8))
        out = tmp_path / "out"

        with caplog.at_level(logging.ERROR):
            stats = _make_runner(image_dir, out, [Rectangle(10, 10, 40, 40), Rectangle(60, 20, 90, 50)]).run()

        assert stats.files_seen == 3
        assert stats.processed == 2
        assert stats.errors == 1
        assert "a.png" in caplog.text
        assert sorted(os.listdir(out)) == [
            "a_face_1.webp", "a_face_2.webp",
            "b_face_1.webp", "b_face_2.webp",
            "output_a.jpg.webp", "output_b.png.webp",
        ]

    def test_corrupt_file_logged_and_batch_continues(self, image_dir, tmp_path, caplog):
        (image_dir / "0_broken.png").write_bytes(b"garbage")
        out = tmp_path / "out"

        with caplog.at_level(logging.ERROR):
            stats = _make_runner(image_dir, out, [Rectangle(10, 10, 40, 40)]).run()

        assert stats.files_seen == 3
        assert stats.errors == 1
        assert stats.processed == 2
        assert "0_broken.png" in caplog.text
        assert "output_a.png.webp" in os.listdir(out)
        assert "output_b.png.webp" in os.listdir(out)

    def test_missing_input_directory_is_fatal(self, tmp_path):
        runner = _make_runner(tmp_path / "missing", tmp_path / "out", [])

        with pytest.raises(OSError):
            runner.run()

    def test_output_directory_creation_failure_is_fatal(self, image_dir, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        runner = _make_runner(image_dir, blocker / "out", [])

        with pytest.raises(OSError):
            runner.run()

    def test_stats_reset_between_runs(self, image_dir, tmp_path):
        runner = _make_runner(image_dir, tmp_path / "out", [Rectangle(10, 10, 40, 40)])

        runner.run()
        stats = runner.run()

        assert stats.processed == 2
        assert stats.faces == 2
        assert isinstance(stats, BatchStats)
        assert stats.elapsed >= 0.0
