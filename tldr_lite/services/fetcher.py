"""
Download the compressed bundle of pages.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiofiles
import httpx

from tldr_lite.domain.exceptions import FetchError

logger = logging.getLogger(__name__)


def _is_retryable(error: Exception) -> bool:
    """Network failures and 5xx responses are worth another attempt; 4xx and local IO errors are not."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.TransportError)


async def download_bundle(
    url: str,
    destination: Path,
    attempts: int = 3,
    timeout: float = 60.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Path:
    """
    Download url to destination.

    Args:
        url: Bundle URL
        destination: Final path of the downloaded archive
        attempts: How many times to try before giving up
        timeout: Network timeout in seconds
        transport: Optional httpx transport (used by tests)

    Returns:
        destination, once the complete file is in place
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    # Download to a temp file first to avoid leaving a partial archive behind.
    tmp_path = destination.with_name(f"{destination.name}.tmp")
    tmp_path.unlink(missing_ok=True)

    for attempt in range(1, attempts + 1):
        try:
            async with httpx.AsyncClient(
                follow_redirects=True, timeout=timeout, transport=transport
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    total_size = int(response.headers.get("content-length", 0))
                    downloaded = 0

                    async with aiofiles.open(tmp_path, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            await f.write(chunk)
                            downloaded += len(chunk)
                            if total_size > 0:
                                percent = (downloaded / total_size) * 100
                                logger.debug(f"Progress: {percent:.1f}%")
            break
        except httpx.InvalidURL as e:
            logger.error(f"Invalid bundle URL {url!r}: {e}")
            raise FetchError("Failed to fetch pages", f"invalid URL: {e}") from e
        except (httpx.HTTPError, OSError) as e:
            tmp_path.unlink(missing_ok=True)
            if attempt < attempts and _is_retryable(e):
                logger.warning(f"Download failed (attempt {attempt}/{attempts}): {e}. Retrying...")
                await asyncio.sleep(1.0 * attempt)
            else:
                logger.error(f"Failed to download {url}: {e}")
                raise FetchError("Failed to fetch pages", str(e) or type(e).__name__) from e

    # Move temp file into place.
    try:
        tmp_path.replace(destination)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise FetchError("Failed to store the downloaded bundle", str(e)) from e
    logger.info(f"Downloaded {url} to {destination}")
    return destination
