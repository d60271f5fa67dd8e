"""Uploaded file handles consumed by the batch pipeline."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UploadedFile(Protocol):
    """Anything with a file name and asynchronously readable content."""

    name: str

    async def read(self) -> bytes:
        ...


@dataclass(frozen=True)
class MemoryFile:
    """Upload whose content is already held in memory."""

    name: str
    content: bytes

    async def read(self) -> bytes:
        return self.content


@dataclass(frozen=True)
class LocalFile:
    """Upload backed by a file on disk, read in a worker thread."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class StarletteUpload:
    """Adapter exposing a FastAPI ``UploadFile`` as an :class:`UploadedFile`.

    The content is read once and cached so the pipeline can re-read it after
    the request body has been consumed.
    """

    def __init__(self, upload: Any):
        self.name: str = upload.filename or ""
        self._upload = upload
        self._content: bytes | None = None

    async def read(self) -> bytes:
        if self._content is None:
            await self._upload.seek(0)
            self._content = await self._upload.read()
        return self._content

    async def detach(self) -> MemoryFile:
        """Read the upload fully and return an in-memory copy."""
        return MemoryFile(self.name, await self.read())
