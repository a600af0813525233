import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from tldr_lite.core.dependencies import get_data_dir, get_settings
from tldr_lite.data.page_index import find_page, list_pages
from tldr_lite.domain.exceptions import OutputError, TldrError
from tldr_lite.services.renderer import render_page
from tldr_lite.services.updater import index_path, language_root, update_pages

LOG_LEVEL_ENV_VAR = "TLDR_LITE_LOG_LEVEL"

PLATFORMS = ["android", "common", "freebsd", "linux", "netbsd", "openbsd", "osx", "sunos", "windows"]

OPTION_STRINGS = frozenset({"-h", "--help", "-l", "--list", "-u", "--update"})

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tldr-lite",
        usage="tldr-lite [options] <[platform/]command>",
        description="Show simplified, community-maintained examples for a command.",
        epilog="platforms: " + ", ".join(PLATFORMS),
        add_help=False,
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-h", "--help", action="store_true", help="this help overview")
    group.add_argument("-l", "--list", action="store_true", help="show all available pages")
    group.add_argument("-u", "--update", action="store_true", help="fetch latest copies of cached pages")
    parser.add_argument("page", nargs="?", metavar="[platform/]command", help="show examples for this command")
    return parser


def cmd_update() -> int:
    data_dir = get_data_dir()
    status = asyncio.run(update_pages(get_settings(), data_dir))
    print(f"Indexed {status.page_count} pages.")
    return 0


def cmd_list() -> int:
    settings = get_settings()
    for name in list_pages(index_path(get_data_dir(), settings), settings.page_extension):
        try:
            print(name)
        except OSError as e:
            raise OutputError("Failed to write the page list", str(e)) from e
    return 0


def cmd_show(query: str) -> int:
    settings = get_settings()
    data_dir = get_data_dir()
    relative = find_page(query, index_path(data_dir, settings), settings.page_extension)
    if relative is None:
        print("The page has not been found.")
        return 1
    render_page(
        relative,
        language_root(data_dir, settings),
        settings.styles,
        sys.stdout,
        show_unstyled=settings.show_unstyled_lines,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point. Exactly one argument is accepted: an option or a page query.
    """
    args_list = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    # Wrong number of arguments, or an option we do not know.
    if len(args_list) != 1 or (args_list[0].startswith("-") and args_list[0] not in OPTION_STRINGS):
        parser.print_help()
        return 1

    args = parser.parse_args(args_list)
    try:
        if args.help:
            parser.print_help()
            return 0
        if args.update:
            return cmd_update()
        if args.list:
            return cmd_list()
        return cmd_show(args.page)
    except TldrError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(str(e), file=sys.stderr)
        return 1


def run() -> None:
    configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    run()
