"""
Update pipeline: download the bundle, extract the configured language and
rebuild the index. Each stage only runs if the previous one succeeded.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx

from tldr_lite.data.page_index import build_index
from tldr_lite.data.update_status import UpdateStatusStore
from tldr_lite.domain.models import UpdateStatus, ViewerSettings
from tldr_lite.services.extractor import extract_subtree
from tldr_lite.services.fetcher import download_bundle

logger = logging.getLogger(__name__)


def language_root(data_dir: Path, settings: ViewerSettings) -> Path:
    return data_dir / settings.language


def index_path(data_dir: Path, settings: ViewerSettings) -> Path:
    return data_dir / settings.index_name


async def update_pages(
    settings: ViewerSettings,
    data_dir: Path,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UpdateStatus:
    """
    Fetch, extract and index the pages.

    The downloaded bundle is removed afterwards whether or not the update
    succeeded. Errors from any stage propagate unchanged.
    """
    bundle_path = data_dir / settings.download_name
    try:
        print("Fetching pages...")
        await download_bundle(
            settings.source_url,
            bundle_path,
            attempts=settings.download_attempts,
            timeout=settings.download_timeout,
            transport=transport,
        )

        print("Extracting pages...")
        extract_subtree(
            bundle_path,
            settings.language,
            data_dir,
            archive_root=settings.archive_root,
        )

        print("Indexing pages...")
        page_count = build_index(language_root(data_dir, settings), index_path(data_dir, settings))
    finally:
        bundle_path.unlink(missing_ok=True)

    status = UpdateStatusStore(data_dir).record_update(
        language=settings.language,
        source_url=settings.source_url,
        page_count=page_count,
    )
    logger.info(f"Update finished: {page_count} pages indexed")
    return status
