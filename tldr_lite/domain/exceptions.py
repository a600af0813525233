"""
Errors raised by the update and display operations.

Every fatal failure is a TldrError; the CLI prints it and exits with status 1.
A page that is simply not in the index is not an error (find_page returns None).
"""
from __future__ import annotations

from typing import Optional


class TldrError(Exception):
    """Base class carrying a short message plus optional underlying detail."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"{self.message}; details: {self.details or 'none'}."


class FetchError(TldrError):
    """The bundle could not be downloaded."""


class ExtractError(TldrError):
    """The bundle could not be opened, is not a zip archive, or a page could not be written."""


class SubtreeNotFoundError(ExtractError):
    """The bundle holds no entries for the requested language subtree."""


class PageIndexError(TldrError):
    """The index or a page file could not be read or written."""


class OutputError(TldrError):
    """A rendered page could not be written to the terminal or pipe."""
