from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pytest

from tldr_lite.core import dependencies


TAR_PAGE = (
    "# tar\n"
    "\n"
    "> Archiving utility.\n"
    "\n"
    "- Create an archive from files:\n"
    "\n"
    "`tar cf {{target.tar}} {{file1}} {{file2}}`\n"
)


def make_bundle(path: Path, entries: Iterable[Tuple[str, Optional[str]]]) -> Path:
    """Write a zip with entries in the given order; a None body makes a directory entry."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, body in entries:
            if body is None:
                zf.writestr(zipfile.ZipInfo(name), "")
            else:
                zf.writestr(name, body)
    return path


def sample_entries():
    return [
        ("tldr-main/", None),
        ("tldr-main/README.md", "readme"),
        ("tldr-main/pages.de/", None),
        ("tldr-main/pages.de/linux/", None),
        ("tldr-main/pages.de/linux/ls.md", "# ls\n"),
        ("tldr-main/pages/", None),
        ("tldr-main/pages/common/", None),
        ("tldr-main/pages/common/tar.md", TAR_PAGE),
        ("tldr-main/pages/common/git.md", "# git\n"),
        ("tldr-main/pages/linux/", None),
        ("tldr-main/pages/linux/ls.md", "# ls\n> List files.\n"),
        ("tldr-main/scripts/build.sh", "#!/bin/sh\n"),
    ]


@pytest.fixture
def bundle_bytes(tmp_path: Path) -> bytes:
    path = make_bundle(tmp_path / "bundle.zip", sample_entries())
    return path.read_bytes()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv(dependencies.DATA_ROOT_ENV_VAR, str(home))
    dependencies.reset_settings()
    yield home
    dependencies.reset_settings()


def write_pages(root: Path, pages: dict) -> None:
    for relative, body in pages.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(body, encoding="utf-8")
