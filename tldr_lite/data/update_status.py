"""
Track when the cached pages were last updated.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tldr_lite.domain.models import UpdateStatus

logger = logging.getLogger(__name__)

STATUS_FILE_NAME = "status.json"


class UpdateStatusStore:
    """Manages storage of the update status."""

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.status_file = self.data_dir / STATUS_FILE_NAME
        self._status: Optional[UpdateStatus] = None
        self._load()

    def _load(self):
        """Load update status from disk."""
        if self.status_file.exists():
            try:
                data = json.loads(self.status_file.read_text(encoding="utf-8"))
                self._status = UpdateStatus(**data)
            except (OSError, json.JSONDecodeError, UnicodeDecodeError, TypeError, ValidationError) as e:
                logger.warning(f"Ignoring unreadable status file {self.status_file}: {e}")
                self._status = UpdateStatus()
        else:
            self._status = UpdateStatus()

    def _save(self):
        """Save update status to disk. Failures are logged, not raised."""
        try:
            self.status_file.parent.mkdir(parents=True, exist_ok=True)
            self.status_file.write_text(
                self._status.model_dump_json(indent=2, exclude_none=True),
                encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Could not write status file {self.status_file}: {e}")

    def get_status(self) -> UpdateStatus:
        """Get the current update status."""
        if self._status is None:
            self._load()
        return self._status

    def record_update(self, language: str, source_url: str, page_count: int) -> UpdateStatus:
        """Stamp a successful update with the current time."""
        self._status = UpdateStatus(
            last_updated=datetime.now(timezone.utc),
            language=language,
            source_url=source_url,
            page_count=page_count,
        )
        self._save()
        return self._status
