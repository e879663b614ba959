"""Command-line front door for reproject.

Parses CLI options, loads configuration, and resolves the target path.
Then renders the structure listing and dispatches it to the chosen sink.
"""

from __future__ import annotations

import argparse
import locale
import logging
import sys
from pathlib import Path

from . import config as config_module
from .config import load_project_config, save_project_config
from .structure import GenerationStatus, InvocationError, OutputMode, generate_structure

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 130


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reproject",
        description="Write a tree-style listing of a directory to a file, the clipboard, or stdout.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to list; a file selects its parent. Defaults to current directory.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--clipboard", action="store_true", help="Copy the listing to the clipboard.")
    mode.add_argument("--stdout", action="store_true", help="Print the listing instead of writing a file.")
    parser.add_argument(
        "--ignore",
        metavar="NAME",
        action="append",
        default=[],
        help="Exact entry name to skip (repeatable, added to configured names).",
    )
    parser.add_argument("--output", metavar="NAME", default=None, help="Output file name inside the target directory.")
    parser.add_argument("--open", action="store_true", help="Open the written file in $EDITOR.")
    parser.add_argument("--config", metavar="PATH", default=None, help="Config file to read instead of the default.")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective ignore names and output name to the config file.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug diagnostics to stderr.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> int:
    """Parse CLI arguments and generate one structure listing.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used as the fallback target.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Host collation locale unavailable; using default ordering")

    config_path = Path(args.config) if args.config is not None else config_module.CONFIG_PATH
    project_config = load_project_config(config_path).with_overrides(args.ignore, args.output)
    if args.save_config:
        save_project_config(project_config, config_path)

    if args.clipboard:
        mode = OutputMode.CLIPBOARD
    elif args.stdout:
        mode = OutputMode.STDOUT
    else:
        mode = OutputMode.FILE

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else None

    try:
        result = generate_structure(
            path,
            mode,
            project_config,
            fallback=default_path,
            open_editor=args.open,
        )
    except InvocationError as exc:
        raise SystemExit(str(exc)) from exc

    if result.status is GenerationStatus.CANCELLED:
        print(result.message, file=sys.stderr)
        return EXIT_CANCELLED
    if result.status is GenerationStatus.FAILED:
        print(result.message, file=sys.stderr)
        return EXIT_FAILED
    if result.message:
        print(result.message)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
