"""Pair layout dumps with screenshots by shared base file name."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from .uploads import UploadedFile

ONLY_EXTENSION = re.compile(r"^\.[^.]+$")


@dataclass(frozen=True)
class FilePair:
    """A layout dump and a screenshot sharing the base name ``name``."""

    name: str
    layout_dump_file: Optional[UploadedFile]
    screenshot_file: Optional[UploadedFile]

    @property
    def is_complete(self) -> bool:
        return self.layout_dump_file is not None and self.screenshot_file is not None


def base_name(file_name: str) -> str:
    """Strip the last ``.extension``; names without one are returned as-is."""
    stem = file_name[:file_name.rfind(".")] if "." in file_name else ""
    return stem or file_name


def find_counterpart(name: str, group: Sequence[UploadedFile]) -> Optional[UploadedFile]:
    """First file in ``group`` named ``name`` plus exactly one extension."""
    for file in group:
        if file.name.startswith(name) and ONLY_EXTENSION.match(file.name[len(name):]):
            return file
    return None


def match_files(
    layout_dumps: Sequence[UploadedFile],
    screenshots: Sequence[UploadedFile],
) -> list[FilePair]:
    """Pair every layout dump with its screenshot, in layout dump order.

    Names are derived from ``layout_dumps`` only; screenshots without a
    matching dump are dropped.  Either slot is ``None`` when no counterpart
    exists.  Repeated base names yield repeated, identical pairs.
    """
    names = [base_name(file.name) for file in layout_dumps]

    slots: dict[str, tuple[Optional[UploadedFile], Optional[UploadedFile]]] = {}
    for name in names:
        slots[name] = (find_counterpart(name, layout_dumps), find_counterpart(name, screenshots))

    return [FilePair(name, *slots[name]) for name in names]


def complete_pairs(pairs: Sequence[FilePair]) -> list[FilePair]:
    """Pairs with both files present."""
    return [pair for pair in pairs if pair.is_complete]


def has_count_mismatch(layout_dumps: Sequence[UploadedFile], screenshots: Sequence[UploadedFile]) -> bool:
    return len(layout_dumps) != len(screenshots)


def has_title_mismatch(pairs: Sequence[FilePair], layout_dumps: Sequence[UploadedFile]) -> bool:
    """True when some dump did not find its screenshot (or vice versa)."""
    return len(complete_pairs(pairs)) != len(layout_dumps)
