"""Command-line front door for nershell.

Parses CLI options, merges them with the persisted config, wires logging and
builds the session before handing control to the interactive loop.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import config
from .annotations import AnnotationStore
from .log import configure_logging, level_names
from .navigation import Navigator
from .preview import DEFAULT_STYLE
from .session import Session
from .shell import run_shell
from .ui_theme import available_theme_names, resolve_theme


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nershell",
        description="Browse a directory by entry number: view, copy, cut, paste, delete and annotate files.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Root directory of the session. Defaults to the current directory; the shell never goes above it.",
    )
    parser.add_argument("--annotations", metavar="FILE", help="Annotation side-file (JSON).")
    parser.add_argument("--style", default=None, help=f"Pygments style for file contents (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--show-hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List entries whose name starts with a dot.",
    )
    parser.add_argument("--log-level", default=None, choices=level_names(), help="Console log level (default: WARNING).")
    parser.add_argument(
        "--log-file",
        nargs="?",
        const=config.DEFAULT_LOG_PATH,
        default=None,
        type=Path,
        help=f"Also log to FILE (default when given without a value: {config.DEFAULT_LOG_PATH}).",
    )
    parser.add_argument(
        "--remember",
        action="store_true",
        help="Save --annotations, --style, --theme and --show-hidden as defaults.",
    )
    return parser


def _remember(args: argparse.Namespace) -> None:
    if args.annotations:
        config.save_annotations_path(Path(args.annotations).expanduser().absolute())
    if args.style:
        config.save_style_name(args.style)
    if args.theme:
        config.save_theme_name(args.theme)
    if args.show_hidden is not None:
        config.save_show_hidden(args.show_hidden)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and start a shell rooted at a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_level, args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    root = Path(args.path or default_path).expanduser()
    if not root.exists():
        raise SystemExit(f"Path not found: {root}")
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    if args.remember:
        _remember(args)

    annotations_path = Path(args.annotations).expanduser() if args.annotations else config.load_annotations_path()
    show_hidden = args.show_hidden if args.show_hidden is not None else config.load_show_hidden()
    style = args.style or config.load_style_name() or DEFAULT_STYLE
    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=no_color)

    session = Session(
        Navigator(root.resolve()),
        AnnotationStore(annotations_path),
        show_hidden=show_hidden,
        style=style,
        no_color=no_color,
        theme=theme,
    )
    run_shell(session)


if __name__ == "__main__":
    main()
