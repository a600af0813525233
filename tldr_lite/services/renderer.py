"""
Print a cached page with ANSI styling.
"""
from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import Dict, Iterator, Optional, TextIO

from tldr_lite.domain.exceptions import OutputError, PageIndexError
from tldr_lite.domain.models import PageStyles

logger = logging.getLogger(__name__)


def _style_table(styles: PageStyles) -> Dict[str, str]:
    return {
        "#": styles.heading,
        ">": styles.subheading,
        "-": styles.command_description,
        "`": styles.command,
    }


def style_line(line: str, styles: PageStyles) -> Optional[str]:
    """
    Wrap a single page line (without terminator) in its style, or return
    None when no rule applies.
    """
    style = _style_table(styles).get(line[:1])
    if style is None:
        return None
    return f"{style}{line}{styles.reset}"


def _read_page_lines(page_path: Path) -> Iterator[str]:
    """Yield the page's lines without terminators."""
    try:
        with open(page_path, "r", encoding="utf-8") as page:
            for raw in page:
                yield raw.rstrip("\r\n")
    except FileNotFoundError as e:
        raise PageIndexError(
            "Failed to open the page, the index may be stale; try 'tldr-lite -u'", str(e)
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise PageIndexError(f"Failed to read the page {page_path.name}", str(e)) from e


def render_page(
    relative_path: str,
    language_root: Path,
    styles: PageStyles,
    out: TextIO,
    show_unstyled: bool = False,
) -> int:
    """
    Stream the page at language_root/relative_path to out.

    Blank lines are skipped. Lines starting with '#', '>', '-' or '`' are
    styled; any other line is dropped unless show_unstyled is set.
    Returns the number of lines written.
    """
    written = 0
    with closing(_read_page_lines(language_root / relative_path)) as lines:
        for line in lines:
            if not line:
                continue
            styled = style_line(line, styles)
            if styled is None:
                if not show_unstyled:
                    logger.debug(f"Dropping unstyled line in {relative_path}: {line!r}")
                    continue
                styled = line
            try:
                out.write(f"{styled}\n")
            except OSError as e:
                raise OutputError("Failed to write the page", str(e)) from e
            written += 1
    return written
