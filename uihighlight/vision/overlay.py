"""Highlight overlay rendering: draw dashed leaf bounds onto screenshots."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import cv2  # type: ignore
import numpy as np

from ..core.config import config
from ..core.exceptions import ImageDecodeError
from ..core.logger import log
from .models import AnnotatedImage, BoundingBox, HighlightStyle


def default_style() -> HighlightStyle:
    """Highlight style taken from the global configuration."""
    return HighlightStyle.from_hex(
        config.highlight_color,
        dash_on=config.highlight_dash_on,
        dash_off=config.highlight_dash_off,
        stroke_width=config.highlight_stroke_width,
    )


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into a BGR bitmap.

    Raises:
        ImageDecodeError: If OpenCV cannot decode the bytes.
    """
    if not data:
        raise ImageDecodeError("Screenshot is empty")
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageDecodeError("Screenshot could not be decoded as an image")
    return image


def encode_png(image: np.ndarray) -> bytes:
    """Encode a bitmap as PNG bytes."""
    ok, encoded = cv2.imencode(".png", image)
    if not ok:
        raise ImageDecodeError("Failed to encode annotated image as PNG")
    return encoded.tobytes()


def _rectangle_path(box: BoundingBox) -> list[tuple[int, int]]:
    """Corner points of a box, clockwise from the top-left, closed."""
    left, top, right, bottom = box.as_tuple()
    return [(left, top), (right, top), (right, bottom), (left, bottom), (left, top)]


@dataclass(frozen=True)
class _Edge:
    """One axis-aligned side of a rectangle, walked from ``start`` in ``direction``."""

    horizontal: bool
    fixed: int
    start: int
    direction: int
    length: int

    @classmethod
    def between(cls, a: tuple[int, int], b: tuple[int, int]) -> "_Edge":
        (x0, y0), (x1, y1) = a, b
        if y0 == y1:
            return cls(True, y0, x0, 1 if x1 >= x0 else -1, abs(x1 - x0))
        return cls(False, x0, y0, 1 if y1 >= y0 else -1, abs(y1 - y0))

    def limits(self, surface: np.ndarray) -> tuple[int, int]:
        """Surface size along and across this edge."""
        height, width = surface.shape[:2]
        return (width, height) if self.horizontal else (height, width)

    def visible_range(self, surface: np.ndarray, margin: int) -> tuple[int, int]:
        """Travel offsets whose pixels fall within ``margin`` of the surface."""
        along, _ = self.limits(surface)
        if self.direction > 0:
            low, high = -margin - self.start, along + margin - self.start
        else:
            low, high = self.start - along - margin, self.start + margin
        return max(low, 0), min(high, self.length)


def _fill_dash(surface: np.ndarray, edge: _Edge, a: int, b: int, style: HighlightStyle) -> None:
    """Fill the dash covering travel offsets ``[a, b)`` of ``edge``.

    A dash that reaches either end of the edge also covers the stroke's corner
    square there.  Coordinates are clipped to the surface before drawing.
    """
    before = style.stroke_width // 2
    after = style.stroke_width - before - 1

    if edge.direction > 0:
        first, last = edge.start + a, edge.start + b - 1
    else:
        first, last = edge.start - b + 1, edge.start - a
    end = edge.start + edge.direction * edge.length
    for corner, touched in ((edge.start, a == 0), (end, b == edge.length)):
        if touched:
            first, last = min(first, corner - before), max(last, corner + after)

    along, across = edge.limits(surface)
    first, last = max(first, 0), min(last, along - 1)
    low, high = max(edge.fixed - before, 0), min(edge.fixed + after, across - 1)
    if first > last or low > high:
        return

    if edge.horizontal:
        pt1, pt2 = (first, low), (last, high)
    else:
        pt1, pt2 = (low, first), (high, last)
    cv2.rectangle(surface, pt1, pt2, style.color, thickness=cv2.FILLED)


def _draw_dashed_path(surface: np.ndarray, points: Sequence[tuple[int, int]], style: HighlightStyle) -> None:
    """Stroke an axis-aligned polyline with a dash phase carried across corners.

    Only the part of each edge near the surface is walked, so the cost depends
    on the image size and not on the box size.
    """
    period = style.dash_on + style.dash_off
    margin = style.stroke_width
    travelled = 0

    for a, b in zip(points, points[1:]):
        edge = _Edge.between(a, b)
        _, across = edge.limits(surface)
        if edge.length and -margin <= edge.fixed <= across + margin:
            pos, stop = edge.visible_range(surface, margin)
            while pos < stop:
                phase = (travelled + pos) % period
                dash_start = pos - phase
                if phase < style.dash_on:
                    dash_end = min(edge.length, dash_start + style.dash_on)
                    _fill_dash(surface, edge, max(dash_start, 0), dash_end, style)
                    pos = dash_end
                else:
                    pos = min(edge.length, dash_start + period)

        travelled += edge.length


def render_overlay(
    source: np.ndarray,
    boxes: Iterable[BoundingBox],
    style: Optional[HighlightStyle] = None,
) -> np.ndarray:
    """Return a copy of ``source`` with every box drawn as a dashed rectangle.

    Boxes with a negative width or height are skipped; zero-area boxes are
    drawn as degenerate lines.
    """
    style = style or default_style()
    surface = source.copy()

    for box in boxes:
        if box.width() < 0 or box.height() < 0:
            log.debug(f"Skipping inverted box {box.as_tuple()}")
            continue
        _draw_dashed_path(surface, _rectangle_path(box), style)

    return surface


def render_annotated_image(
    name: str,
    image_bytes: bytes,
    boxes: Sequence[BoundingBox],
    style: Optional[HighlightStyle] = None,
) -> AnnotatedImage:
    """Decode a screenshot, draw the highlights and encode the result as PNG."""
    start = time.perf_counter()
    source = decode_image(image_bytes)
    surface = render_overlay(source, boxes, style)
    height, width = surface.shape[:2]
    annotated = AnnotatedImage(
        name=name,
        data=encode_png(surface),
        width=width,
        height=height,
        box_count=len(boxes),
    )
    log.log_performance(f"render {name}", (time.perf_counter() - start) * 1000)
    return annotated
