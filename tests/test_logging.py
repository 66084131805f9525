"""
Tests for logging setup.
"""

import logging

import pytest

import ops.logging as ops_logging
from ops.logging import setup_logging


@pytest.fixture
def basic_config_calls(monkeypatch):
    """Record basicConfig calls instead of touching the root logger."""
    calls = []
    monkeypatch.setattr(ops_logging.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    yield calls
    for kwargs in calls:
        for handler in kwargs.get("handlers", []):
            handler.close()


def test_log_file_directory_is_created(tmp_path, basic_config_calls):
    log_path = tmp_path / "logs" / "run.log"

    setup_logging(str(log_path), "DEBUG")

    assert (tmp_path / "logs").is_dir()
    assert len(basic_config_calls) == 1
    kwargs = basic_config_calls[0]
    assert kwargs["level"] == logging.DEBUG
    file_handlers = [h for h in kwargs["handlers"] if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(log_path)


def test_without_log_path_only_stream_handler(basic_config_calls):
    setup_logging(None, "WARNING")

    kwargs = basic_config_calls[0]
    assert kwargs["level"] == logging.WARNING
    assert len(kwargs["handlers"]) == 1
    assert not isinstance(kwargs["handlers"][0], logging.FileHandler)
    assert isinstance(kwargs["handlers"][0], logging.StreamHandler)
