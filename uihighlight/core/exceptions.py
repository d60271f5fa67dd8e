"""Exception types raised by the highlight pipeline."""

from __future__ import annotations


class HighlightError(RuntimeError):
    """Base class for every error raised by this package."""


class LayoutDumpError(HighlightError):
    """Raised when a layout dump cannot be parsed as XML."""


class ImageDecodeError(HighlightError):
    """Raised when screenshot bytes cannot be decoded into a bitmap."""


class BatchNotReadyError(HighlightError):
    """Raised when a run is requested while the uploads do not allow one."""

    def __init__(self, status: str):
        super().__init__(f"Cannot generate highlights in status {status}")
        self.status = status


class ExportError(HighlightError):
    """Raised when there is nothing to export or the archive cannot be built."""
