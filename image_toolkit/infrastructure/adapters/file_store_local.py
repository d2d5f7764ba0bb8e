from __future__ import annotations

import os
from pathlib import Path

import aiofiles
import aiofiles.os

from image_toolkit.application.interfaces.file_store import IFileStore
from image_toolkit.core.exceptions import (
    InvalidParameterError,
    NotFoundError,
    StorageError,
)


class LocalFileStore(IFileStore):
    """Read and write files under a project root directory.

    Relative paths are joined onto the root; absolute paths are accepted
    only when they stay inside it.
    """

    root: Path

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root).resolve()

    def resolve(self, path: str) -> str:
        candidate = (self.root / path).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            raise InvalidParameterError(
                f"Path escapes the project root: {path}", "path", "PATH_OUTSIDE_ROOT"
            )
        return str(candidate)

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.exists(self.resolve(path))

    async def read_bytes(self, path: str) -> bytes:
        full = self.resolve(path)
        if not await aiofiles.os.path.isfile(full):
            raise NotFoundError(f"Image not found: {path}", path)
        try:
            async with aiofiles.open(full, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}", path) from e

    async def makedirs(self, path: str) -> str:
        full = self.resolve(path)
        try:
            await aiofiles.os.makedirs(full, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directory {path}: {e}", path) from e
        return full

    async def write_bytes(self, path: str, data: bytes) -> str:
        full = self.resolve(path)
        parent = os.path.dirname(full)
        try:
            await aiofiles.os.makedirs(parent, exist_ok=True)
            async with aiofiles.open(full, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}", path) from e
        return full

    async def write_text(self, path: str, text: str) -> str:
        return await self.write_bytes(path, text.encode("utf-8"))
