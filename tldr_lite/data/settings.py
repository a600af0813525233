from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tldr_lite.domain.models import ViewerSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"


def settings_path(data_dir: Path) -> Path:
    return data_dir / SETTINGS_FILE_NAME


def load_settings(data_dir: Path) -> ViewerSettings:
    """
    Load settings.json, merging with defaults for any missing fields,
    and write it back so any new fields are persisted.

    A file that cannot be parsed is left untouched and the defaults are used.
    """
    path = settings_path(data_dir)
    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            settings = ViewerSettings(**raw)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring invalid settings file {path}: {e}")
            return ViewerSettings()
    else:
        settings = ViewerSettings()

    # Persist with all fields populated (including any new defaults).
    serialized = settings.model_dump_json(indent=2)
    try:
        if not path.exists() or path.read_text(encoding="utf-8") != serialized:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(serialized, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not write settings file {path}: {e}")
    return settings


def save_settings(data_dir: Path, settings: ViewerSettings) -> None:
    path = settings_path(data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
