"""Entry previews for the ``visu`` verb.

Text files are read with tolerant decoding, stripped of terminal control
bytes and highlighted with Pygments. Directories, images and binary files are
summarized by size.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from . import fs
from .errors import FileOperationFailure

DEFAULT_STYLE = "monokai"
TEXT_SNIFF_BYTES = 8_192
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Replace C0/C1 control characters (except newline, CR and tab) with ``\\xNN`` escapes."""
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


def is_image_file(path: Path) -> bool:
    return path.name.lower().endswith(IMAGE_EXTENSIONS)


def is_text_file(path: Path) -> bool:
    """Return whether the head of ``path`` looks like UTF-8 text.

    The sample must hold no NUL byte, decode as UTF-8 and contain no control
    characters other than whitespace.
    """
    try:
        with path.open("rb") as handle:
            sample = handle.read(TEXT_SNIFF_BYTES)
    except OSError:
        return False
    if b"\x00" in sample:
        return False
    try:
        text = sample.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multi-byte sequence cut by the sample boundary is still text.
        if exc.start < len(sample) - 3:
            return False
        text = sample[: exc.start].decode("utf-8")
    return _CONTROL_RE.search(text) is None


def _normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for the terminal, picking a lexer from the file name."""
    style = _normalize_style(style)
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(style))


def describe_entry(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return the text shown by ``visu`` for ``path``."""
    try:
        if fs.is_directory(path):
            return f"Directory size: {fs.tree_size(path)} bytes"
        if fs.is_regular_file(path) and is_text_file(path):
            source = sanitize_terminal_text(read_text(path))
            if no_color or not source:
                return source
            return colorize_source(source, path, style)
        size = fs.file_size(path)
    except OSError as exc:
        raise FileOperationFailure(f"Cannot read {path.name}: {exc}") from exc
    if is_image_file(path):
        return f"Image file: {size} bytes"
    return f"File size: {size} bytes"


__all__ = [
    "DEFAULT_STYLE",
    "IMAGE_EXTENSIONS",
    "read_text",
    "sanitize_terminal_text",
    "is_image_file",
    "is_text_file",
    "colorize_source",
    "describe_entry",
]
