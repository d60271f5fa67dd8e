"""Data models for the vision subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned rectangle (left, top, right, bottom) in pixel coordinates."""

    left: int
    top: int
    right: int
    bottom: int

    def width(self) -> int:
        """Width in pixels."""
        return self.right - self.left

    def height(self) -> int:
        """Height in pixels."""
        return self.bottom - self.top

    def is_inverted(self) -> bool:
        """True when right/bottom lie before left/top."""
        return self.right < self.left or self.bottom < self.top

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return bounding box as ``(left, top, right, bottom)`` tuple."""
        return self.left, self.top, self.right, self.bottom


@dataclass(frozen=True, slots=True)
class HighlightStyle:
    """Stroke settings used when drawing highlight rectangles."""

    color: tuple[int, int, int] = (0, 255, 255)  # Yellow in BGR
    dash_on: int = 25
    dash_off: int = 25
    stroke_width: int = 15

    @classmethod
    def from_hex(
        cls,
        hex_color: str,
        dash_on: int = 25,
        dash_off: int = 25,
        stroke_width: int = 15,
    ) -> HighlightStyle:
        """Build a style from a ``#rrggbb`` string."""
        value = hex_color.lstrip("#")
        red, green, blue = (int(value[i:i + 2], 16) for i in (0, 2, 4))
        return cls(color=(blue, green, red), dash_on=dash_on, dash_off=dash_off, stroke_width=stroke_width)


@dataclass(frozen=True, slots=True)
class AnnotatedImage:
    """A screenshot with highlight rectangles composited on top."""

    name: str
    data: bytes
    width: int
    height: int
    box_count: int
    media_type: str = "image/png"
