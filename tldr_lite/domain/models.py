from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_SOURCE_URL = "https://github.com/tldr-pages/tldr/archive/refs/heads/main.zip"


class PageStyles(BaseModel):
    """
    ANSI sequences wrapped around each styled page line.

    Empty strings disable styling for that kind of line.
    """

    heading: str = Field(
        default="\033[1;4m",
        description="Style for '#' lines (the page title).",
    )
    subheading: str = Field(
        default="\033[3m",
        description="Style for '>' lines (the page description).",
    )
    command_description: str = Field(
        default="\033[32m",
        description="Style for '-' lines (what an example does).",
    )
    command: str = Field(
        default="\033[1;31m",
        description="Style for '`' lines (the literal command).",
    )
    reset: str = Field(
        default="\033[0m",
        description="Sequence written after every styled line.",
    )


class ViewerSettings(BaseModel):
    """
    Runtime configuration for the viewer.
    Persisted at: <DATA_DIR>/settings.json
    """

    source_url: str = Field(
        default=DEFAULT_SOURCE_URL,
        description="Where the compressed bundle of all pages is downloaded from.",
    )
    language: str = Field(
        default="pages",
        description="Language subtree extracted from the bundle (pages, pages.de, ...).",
    )
    archive_root: Optional[str] = Field(
        default=None,
        description="Top-level directory inside the bundle. Detected from the archive when unset.",
    )
    download_name: str = Field(
        default="tldr.zip",
        description="File name the bundle is downloaded to inside the data directory.",
    )
    index_name: str = Field(
        default="index",
        description="File name of the flat page index inside the data directory.",
    )
    page_extension: str = Field(
        default=".md",
        description="Extension appended to a query before matching it against the index.",
    )
    download_attempts: int = Field(
        default=3,
        ge=1,
        description="How many times a failed download is attempted before giving up.",
    )
    download_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Network timeout in seconds for the bundle download.",
    )
    show_unstyled_lines: bool = Field(
        default=False,
        description="Print page lines that match no style rule instead of dropping them.",
    )
    styles: PageStyles = Field(default_factory=PageStyles)


class UpdateStatus(BaseModel):
    """Outcome of the last successful update."""
    last_updated: Optional[datetime] = Field(default=None, description="When the pages were last fetched")
    language: Optional[str] = Field(default=None, description="Language subtree that was extracted")
    source_url: Optional[str] = Field(default=None, description="Bundle URL the pages came from")
    page_count: int = Field(default=0, description="Number of lines written to the index")
