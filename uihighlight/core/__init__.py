"""Core components of the UI highlight generator.

The batch orchestrator lives in :mod:`uihighlight.core.batch`; it is not
re-exported here because it depends on the vision sub-package, which in turn
depends on this package's configuration and logging.
"""

from .config import Config, config
from .exceptions import (
    BatchNotReadyError,
    ExportError,
    HighlightError,
    ImageDecodeError,
    LayoutDumpError,
)
from .logger import Logger, log
from .pairing import FilePair, match_files
from .status import StatusMessage, compute_idle_status
from .uploads import LocalFile, MemoryFile, UploadedFile

__all__ = [
    "BatchNotReadyError",
    "Config",
    "ExportError",
    "FilePair",
    "HighlightError",
    "ImageDecodeError",
    "LayoutDumpError",
    "LocalFile",
    "Logger",
    "MemoryFile",
    "StatusMessage",
    "UploadedFile",
    "compute_idle_status",
    "config",
    "log",
    "match_files",
]
