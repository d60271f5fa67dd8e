"""Layout dump parsing and highlight rendering.

This sub-package turns ``uiautomator`` layout dumps into leaf bounding boxes
and draws those boxes onto the matching screenshots.
"""

from .bounds import extract_leaf_bounds, parse_layout_dump
from .models import AnnotatedImage, BoundingBox, HighlightStyle
from .overlay import render_annotated_image, render_overlay

__all__ = [
    "AnnotatedImage",
    "BoundingBox",
    "HighlightStyle",
    "extract_leaf_bounds",
    "parse_layout_dump",
    "render_annotated_image",
    "render_overlay",
]
