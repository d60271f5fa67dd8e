"""Utility functions for the UI highlight generator.

This sub-package provides utility functions for:
- File and path operations
- Exporting annotated images as a ZIP archive
"""

from .export import build_archive
from .file_utils import collect_files, ensure_directory, save_annotated_images, save_bytes

__all__ = [
    "build_archive",
    "collect_files",
    "ensure_directory",
    "save_annotated_images",
    "save_bytes",
]
