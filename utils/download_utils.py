"""
Download utility functions.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from image_toolkit.core.config import settings
from image_toolkit.core.exceptions import SourceFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


async def fetch_bytes(
    url: str, *, timeout: Optional[float] = None, max_bytes: Optional[int] = None
) -> bytes:
    """
    Download a remote resource into memory.

    Args:
        url: Source URL to download from
        timeout: Total timeout in seconds (defaults to settings.download_timeout)
        max_bytes: Abort once the body grows past this size (defaults to
            settings.max_file_size)

    Returns:
        The response body

    Raises:
        SourceFetchError: on HTTP errors, timeouts or oversized bodies
    """
    limit = max_bytes if max_bytes is not None else settings.max_file_size
    client_timeout = aiohttp.ClientTimeout(total=timeout or settings.download_timeout)
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()

                chunks = []
                received = 0
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    received += len(chunk)
                    if limit and received > limit:
                        raise SourceFetchError(
                            f"Response from {url} exceeds {limit} bytes", url
                        )
                    chunks.append(chunk)

                logger.debug("Downloaded %s (%d bytes)", url, received)
                return b"".join(chunks)

    except aiohttp.ClientError as e:
        logger.error("Failed to download %s: %s", url, str(e))
        raise SourceFetchError(f"Failed to download {url}: {e}", url) from e
    except asyncio.TimeoutError as e:
        logger.error("Timed out downloading %s", url)
        raise SourceFetchError(f"Timed out downloading {url}", url) from e
