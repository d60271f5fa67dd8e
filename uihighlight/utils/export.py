"""Bundle annotated images into a downloadable ZIP archive."""

from __future__ import annotations

import io
import json
import zipfile
from typing import Sequence

from ..core.exceptions import ExportError
from ..vision.models import AnnotatedImage

MANIFEST_NAME = "manifest.json"


def archive_member_name(image: AnnotatedImage) -> str:
    return f"{image.name}.png"


def build_manifest(images: Sequence[AnnotatedImage]) -> list[dict]:
    return [
        {
            "name": image.name,
            "file": archive_member_name(image),
            "width": image.width,
            "height": image.height,
            "box_count": image.box_count,
        }
        for image in images
    ]


def build_archive(images: Sequence[AnnotatedImage]) -> bytes:
    """Return a ZIP holding one PNG per image plus a JSON manifest.

    Raises:
        ExportError: If ``images`` is empty.
    """
    if not images:
        raise ExportError("No completed highlight images to export")

    buffer = io.BytesIO()
    # PNG data is already compressed
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        for image in images:
            archive.writestr(archive_member_name(image), image.data)
        archive.writestr(MANIFEST_NAME, json.dumps(build_manifest(images), indent=2))
    return buffer.getvalue()
