"""
Face regions in working-raster pixel coordinates.

The expansion rule pads a detected face box asymmetrically: half the face
width to each side, half the face height above and a full face height below,
so the crop takes in the chin and neck. The result is clamped to the raster.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rectangle:
    """
    An axis-aligned rectangle in pixel coordinates.

    Attributes:
        left: Left edge x coordinate (inclusive).
        top: Top edge y coordinate (inclusive).
        right: Right edge x coordinate (exclusive).
        bottom: Bottom edge y coordinate (exclusive).
    """
    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if self.right < self.left or self.bottom < self.top:
            raise ValueError(
                f"Invalid rectangle ({self.left},{self.top})-({self.right},{self.bottom})"
            )

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    def contains(self, other: "Rectangle") -> bool:
        """True if every corner of other lies inside this rectangle."""
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    @classmethod
    def from_xywh(cls, x: int, y: int, w: int, h: int) -> "Rectangle":
        """Create from (x, y, width, height) format, as returned by detectMultiScale."""
        return cls(left=int(x), top=int(y), right=int(x) + int(w), bottom=int(y) + int(h))


def clamp_region(rect: Rectangle, width: int, height: int) -> Rectangle:
    """Clamp a rectangle to the raster bounds [0, width] x [0, height]."""
    left = min(max(0, rect.left), width)
    top = min(max(0, rect.top), height)
    return Rectangle(
        left=left,
        top=top,
        right=max(left, min(width, rect.right)),
        bottom=max(top, min(height, rect.bottom)),
    )


def expand_region(rect: Rectangle, width: int, height: int) -> Rectangle:
    """
    Expand a detected face box into its crop region.

    Args:
        rect: Raw detection in working-raster coordinates.
        width: Working raster width.
        height: Working raster height.

    Returns:
        The padded rectangle, clamped to the raster. Used both for the
        outline drawn on the annotated image and for the face crop.
    """
    pad_x = rect.width // 2
    pad_top = rect.height // 2
    pad_bottom = rect.height
    return clamp_region(
        Rectangle(
            left=rect.left - pad_x,
            top=rect.top - pad_top,
            right=rect.right + pad_x,
            bottom=rect.bottom + pad_bottom,
        ),
        width,
        height,
    )
