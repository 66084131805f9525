"""
Operational helpers: logging setup and error types.
"""

from .errors import ConfigError, DecodeError, DetectionError, EncodeError, FaceCropError
from .logging import setup_logging

__all__ = [
    "FaceCropError",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "DetectionError",
    "setup_logging",
]
