from __future__ import annotations

from typing import Optional, Protocol


class IPlaceholderSource(Protocol):
    """Random placeholder photo provider (Picsum compatible)."""

    async def fetch(
        self,
        *,
        width: int,
        height: int,
        image_format: str,
        image_id: Optional[int] = None,
        blur: Optional[int] = None,
        grayscale: bool = False,
    ) -> bytes:
        """Return encoded image bytes of roughly width x height."""
        ...
