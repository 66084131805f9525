"""
Error types for the face crop pipeline.

Unreadable inputs and unwritable outputs surface as the built-in OSError.
"""

from __future__ import annotations


class FaceCropError(Exception):
    """Base class for pipeline errors."""


class ConfigError(FaceCropError):
    """Invalid configuration or missing classifier definition. Fatal for a run."""


class DecodeError(FaceCropError):
    """Input file exists but could not be decoded as an image."""


class EncodeError(FaceCropError):
    """Raster could not be serialized to the output format."""


class DetectionError(FaceCropError):
    """The face detector failed on a raster."""
