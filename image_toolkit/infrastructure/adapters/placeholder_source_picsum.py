from __future__ import annotations

import logging
from typing import Optional

from image_toolkit.application.interfaces.placeholder_source import IPlaceholderSource
from image_toolkit.core.config import settings
from utils.derived_assets import build_placeholder_url
from utils.download_utils import fetch_bytes

logger = logging.getLogger(__name__)


class PicsumPlaceholderSource(IPlaceholderSource):
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = base_url or settings.placeholder_base_url
        self.timeout = timeout

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
        url = build_placeholder_url(
            self.base_url, width, height, image_format, image_id, blur, grayscale
        )
        logger.info("Fetching placeholder photo %s", url)
        return await fetch_bytes(url, timeout=self.timeout)
