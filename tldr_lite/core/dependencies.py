from pathlib import Path
from typing import Optional
import os

from tldr_lite.data.settings import load_settings
from tldr_lite.domain.models import ViewerSettings

DATA_ROOT_ENV_VAR = "TLDR_LITE_HOME"
_DEFAULT_DATA_DIR = Path("~/.tldrc")

_settings: Optional[ViewerSettings] = None

def get_data_dir() -> Path:
    env_path = os.environ.get(DATA_ROOT_ENV_VAR)
    if env_path:
        d = Path(env_path).expanduser()
    else:
        d = _DEFAULT_DATA_DIR.expanduser()
    d.mkdir(parents=True, exist_ok=True)
    return d

def get_settings() -> ViewerSettings:
    global _settings
    if _settings is None:
        _settings = load_settings(get_data_dir())
    return _settings

def reset_settings() -> None:
    global _settings
    _settings = None
