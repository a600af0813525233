"""
Flat text index of the cached pages.

The index lives at <DATA_DIR>/index and holds one '<platform>/<command>.md'
line per page of the configured language. It is derived from the cache tree
and must be rebuilt whenever the tree changes (see services.updater).
"""
from __future__ import annotations

import logging
import os
from contextlib import closing
from pathlib import Path
from typing import Iterator, Optional

from tldr_lite.domain.exceptions import PageIndexError
from tldr_lite.domain.page_utils import matches_query, page_name

logger = logging.getLogger(__name__)

# Real trees are two levels deep (platform/command.md).
MAX_INDEX_DEPTH = 10


def iter_page_files(language_root: Path, max_depth: int = MAX_INDEX_DEPTH) -> Iterator[str]:
    """
    Depth-first walk of the language root, yielding every regular file as a
    POSIX path relative to it (e.g. 'linux/tar.md').

    Entries are visited in sorted name order so the sequence is stable for an
    unchanged tree.
    """
    if not language_root.is_dir():
        raise PageIndexError(
            "Failed to read the pages directory, probably you should run 'tldr-lite -u'",
            str(language_root),
        )

    def _walk(directory: Path, depth: int) -> Iterator[str]:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                if depth < max_depth:
                    yield from _walk(entry, depth + 1)
                else:
                    logger.debug(f"Not descending below max depth: {entry}")
            elif entry.is_file():
                yield entry.relative_to(language_root).as_posix()

    try:
        yield from _walk(language_root, 1)
    except OSError as e:
        raise PageIndexError("Failed to walk the pages directory", str(e)) from e


def build_index(language_root: Path, index_path: Path) -> int:
    """
    Rebuild the index from scratch. Returns the number of lines written.

    The new index is written next to the old one and renamed over it, so a
    reader never sees a half-written file.
    """
    tmp_path = index_path.with_name(f"{index_path.name}.tmp")
    count = 0
    try:
        index_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            for relative in iter_page_files(language_root):
                try:
                    relative.encode("utf-8")
                except UnicodeEncodeError:
                    logger.warning(f"Skipping page with an undecodable file name: {relative!r}")
                    continue
                f.write(f"{relative}\n")
                count += 1
        os.replace(tmp_path, index_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise PageIndexError("Failed to write the index", str(e)) from e
    except PageIndexError:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info(f"Indexed {count} pages from {language_root} into {index_path}")
    return count


def iter_index_lines(index_path: Path) -> Iterator[str]:
    """Yield index lines without their line terminator."""
    try:
        with open(index_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\r\n")
                if line:
                    yield line
    except FileNotFoundError as e:
        raise PageIndexError(
            "Failed to open index, probably you should run 'tldr-lite -u'", str(index_path)
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise PageIndexError("Failed to read the index", str(e)) from e


def list_pages(index_path: Path, extension: str = ".md") -> Iterator[str]:
    """Page names in index order, platform and extension stripped."""
    for line in iter_index_lines(index_path):
        yield page_name(line, extension)


def find_page(query: str, index_path: Path, extension: str = ".md") -> Optional[str]:
    """
    Look a query up in the index.

    'platform/command' must match a whole line; a bare 'command' matches the
    first line whose file name equals it, whatever the platform. Returns the
    matched line or None.
    """
    with closing(iter_index_lines(index_path)) as lines:
        for line in lines:
            if matches_query(line, query, extension):
                logger.debug(f"Resolved {query!r} to {line!r}")
                return line
    logger.debug(f"Page not found: {query}")
    return None
