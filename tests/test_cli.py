from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import httpx
import pytest

from conftest import write_pages
from tldr_lite import main as cli
from tldr_lite.services import updater


def _install_pages(data_dir: Path) -> None:
    write_pages(
        data_dir / "pages",
        {
            "common/tar.md": "# tar\n\n> Archiving utility.\n\n`tar cf a.tar b`\n",
            "linux/ls.md": "# ls\nnot styled\n",
        },
    )
    (data_dir / "index").write_text("common/tar.md\nlinux/ls.md\n")


@pytest.fixture
def plain_styles(data_dir: Path) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    styles = {"heading": "", "subheading": "", "command_description": "", "command": "", "reset": ""}
    (data_dir / "settings.json").write_text(json.dumps({"styles": styles}))
    return data_dir


def test_help_exits_zero(data_dir: Path, capsys) -> None:
    assert cli.main(["-h"]) == 0
    assert "usage: tldr-lite" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [[], ["tar", "ls"], ["-x"], ["-u", "-l"]])
def test_bad_usage_exits_one(data_dir: Path, capsys, argv) -> None:
    assert cli.main(argv) == 1
    assert "usage: tldr-lite" in capsys.readouterr().out


def test_show_page(plain_styles: Path, capsys) -> None:
    _install_pages(plain_styles)

    assert cli.main(["tar"]) == 0
    assert capsys.readouterr().out == "# tar\n> Archiving utility.\n`tar cf a.tar b`\n"


def test_show_page_with_platform(plain_styles: Path, capsys) -> None:
    _install_pages(plain_styles)

    assert cli.main(["linux/ls"]) == 0
    assert capsys.readouterr().out == "# ls\n"


def test_show_page_not_found(plain_styles: Path, capsys, monkeypatch) -> None:
    _install_pages(plain_styles)

    def _fail(*args, **kwargs):
        raise AssertionError("render_page must not run for a missing page")

    monkeypatch.setattr(cli, "render_page", _fail)

    assert cli.main(["nonexistent"]) == 1
    assert "The page has not been found." in capsys.readouterr().out


def test_show_without_index(data_dir: Path, capsys) -> None:
    assert cli.main(["tar"]) == 1
    err = capsys.readouterr().err
    assert "Failed to open index" in err
    assert "details:" in err


def test_list(plain_styles: Path, capsys) -> None:
    _install_pages(plain_styles)

    assert cli.main(["-l"]) == 0
    assert capsys.readouterr().out.splitlines() == ["tar", "ls"]


def test_update(data_dir: Path, bundle_bytes: bytes, capsys, monkeypatch) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=bundle_bytes))
    real_update = updater.update_pages

    async def _update(settings, target_dir):
        return await real_update(settings, target_dir, transport=transport)

    monkeypatch.setattr(cli, "update_pages", _update)

    assert cli.main(["-u"]) == 0
    out = capsys.readouterr().out
    assert "Indexed 3 pages." in out
    assert (data_dir / "index").read_text().splitlines() == ["common/git.md", "common/tar.md", "linux/ls.md"]

    assert cli.main(["ls"]) == 0


def test_update_failure_exits_one(data_dir: Path, capsys, monkeypatch) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    real_update = updater.update_pages

    async def _update(settings, target_dir):
        settings = settings.model_copy(update={"download_attempts": 1})
        return await real_update(settings, target_dir, transport=transport)

    monkeypatch.setattr(cli, "update_pages", _update)

    assert cli.main(["-u"]) == 1
    assert "Failed to fetch pages" in capsys.readouterr().err


class _ClosedPipe(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError(32, "Broken pipe")


def test_undecodable_page_exits_one(plain_styles: Path, capsys) -> None:
    _install_pages(plain_styles)
    (plain_styles / "pages" / "linux" / "bad.md").write_bytes(b"# bad\n> caf\xe9\n")
    with open(plain_styles / "index", "a") as f:
        f.write("linux/bad.md\n")

    assert cli.main(["bad"]) == 1
    assert "Failed to read the page bad.md" in capsys.readouterr().err


def test_undecodable_settings_fall_back_to_defaults(data_dir: Path, capsys) -> None:
    _install_pages(data_dir)
    (data_dir / "settings.json").write_bytes(b'{"language": "p\xe9"}')

    assert cli.main(["-l"]) == 0
    assert capsys.readouterr().out.splitlines() == ["tar", "ls"]


def test_list_into_closed_pipe_exits_one(plain_styles: Path, monkeypatch) -> None:
    _install_pages(plain_styles)
    monkeypatch.setattr(sys, "stdout", _ClosedPipe())

    assert cli.main(["-l"]) == 1


def test_malformed_source_url_exits_one(data_dir: Path, capsys) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "settings.json").write_text(json.dumps({"source_url": "http://[::1", "download_attempts": 1}))

    assert cli.main(["-u"]) == 1
    assert "invalid URL" in capsys.readouterr().err


@pytest.mark.parametrize("option", ["-l", "--list"])
def test_long_and_short_list_options(plain_styles: Path, capsys, option) -> None:
    _install_pages(plain_styles)

    assert cli.main([option]) == 0
    assert capsys.readouterr().out.splitlines() == ["tar", "ls"]


def test_unknown_long_option_prints_usage(data_dir: Path, capsys) -> None:
    assert cli.main(["--lis"]) == 1
    assert "usage: tldr-lite" in capsys.readouterr().out
