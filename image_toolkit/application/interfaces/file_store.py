from __future__ import annotations

from typing import Protocol


class IFileStore(Protocol):
    """Filesystem access rooted at the project directory.

    Every path is interpreted relative to the root; implementations must
    refuse paths that resolve outside of it.
    """

    def resolve(self, path: str) -> str:
        """Return the absolute path for a root-relative path."""
        ...

    async def exists(self, path: str) -> bool:
        ...

    async def read_bytes(self, path: str) -> bytes:
        """Read a file; raises NotFoundError when missing."""
        ...

    async def write_bytes(self, path: str, data: bytes) -> str:
        """Write a file, creating parent directories; returns the absolute path."""
        ...

    async def write_text(self, path: str, text: str) -> str:
        ...

    async def makedirs(self, path: str) -> str:
        ...
