"""
Extract one language subtree of the downloaded bundle into the cache.
"""
from __future__ import annotations

import logging
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from tldr_lite.domain.exceptions import ExtractError, SubtreeNotFoundError

logger = logging.getLogger(__name__)


def detect_archive_root(zip_ref: zipfile.ZipFile) -> Optional[str]:
    """Top-level directory of the archive, taken from its first entry."""
    names = zip_ref.namelist()
    if not names:
        return None
    return names[0].split("/", 1)[0]


def _destination_for(entry_name: str, destination_root: Path) -> Path:
    # Drop the archive's top-level directory, keep the rest ('pages/linux/tar.md').
    relative = entry_name.split("/", 1)[1]
    target = (destination_root / relative).resolve()
    root = destination_root.resolve()
    if target != root and root not in target.parents:
        raise ExtractError("Refusing to extract outside the cache directory", entry_name)
    return target


def extract_subtree(
    bundle_path: Path,
    subtree: str,
    destination_root: Path,
    archive_root: Optional[str] = None,
) -> int:
    """
    Extract every entry under '<archive_root>/<subtree>/' into destination_root.

    Entries are scanned in archive order: everything before the subtree is
    skipped and extraction stops at the first entry outside it, so the
    subtree is expected to be contiguous in the archive.

    Returns the number of files written.
    """
    try:
        zip_ref = zipfile.ZipFile(bundle_path, "r")
    except zipfile.BadZipFile as e:
        raise ExtractError("Unsupported archive format", f"{bundle_path}: {e}") from e
    except OSError as e:
        raise ExtractError("Failed to open the archive", str(e)) from e

    with zip_ref:
        root = archive_root or detect_archive_root(zip_ref)
        prefix = f"{root}/{subtree}/"
        logger.debug(f"Extracting entries under {prefix} from {bundle_path}")

        started = False
        written = 0
        for info in zip_ref.infolist():
            if not info.filename.startswith(prefix):
                if started:
                    break
                continue
            started = True

            target = _destination_for(info.filename, destination_root)
            try:
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with zip_ref.open(info, "r") as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
            except (OSError, zipfile.BadZipFile, zlib.error) as e:
                raise ExtractError(f"Failed to extract {info.filename}", str(e)) from e
            written += 1

    if not started:
        raise SubtreeNotFoundError(
            f"Language subtree '{subtree}' not found in the archive", prefix
        )

    logger.info(f"Extracted {written} files from {bundle_path} into {destination_root}")
    return written
