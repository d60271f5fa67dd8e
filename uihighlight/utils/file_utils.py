"""File utility functions for the UI highlight generator."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ..core.logger import log
from ..core.uploads import LocalFile
from ..vision.models import AnnotatedImage

LAYOUT_DUMP_SUFFIXES = {".xml"}
SCREENSHOT_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".bmp"}


def ensure_directory(directory_path: str) -> str:
    """Ensure a directory exists, creating it if necessary.

    Args:
        directory_path: Path to the directory.

    Returns:
        Absolute path to the directory.
    """
    path = Path(directory_path).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return str(path)


def collect_files(directory: str, suffixes: Iterable[str]) -> list[LocalFile]:
    """List files in ``directory`` with one of ``suffixes``, sorted by name.

    Args:
        directory: Directory to scan (not recursive).
        suffixes: Lower-case suffixes including the dot.

    Returns:
        Upload handles for the matching files.
    """
    wanted = set(suffixes)
    files = [
        LocalFile(path)
        for path in sorted(Path(directory).iterdir())
        if path.is_file() and path.suffix.lower() in wanted
    ]
    log.debug(f"Found {len(files)} file(s) in {directory} matching {sorted(wanted)}")
    return files


def save_annotated_images(images: Iterable[AnnotatedImage], directory: str) -> list[str]:
    """Write each image as ``<name>.png`` under ``directory``.

    Returns:
        Paths of the written files.
    """
    ensure_directory(directory)
    written = []
    for image in images:
        filepath = os.path.join(directory, f"{image.name}.png")
        with open(filepath, "wb") as f:
            f.write(image.data)
        log.debug(f"Highlight image saved to {filepath}")
        written.append(filepath)
    return written


def save_bytes(data: bytes, filepath: str) -> str:
    """Write ``data`` to ``filepath``, creating parent directories."""
    directory = os.path.dirname(filepath)
    if directory:
        ensure_directory(directory)
    with open(filepath, "wb") as f:
        f.write(data)
    log.debug(f"Data saved to {filepath}")
    return filepath
