"""Text rendering for listings, status lines and the help screen.

Renderers return lists of lines and never write to the terminal themselves;
the shell loop owns output.
"""

from __future__ import annotations

from pathlib import Path

from . import fs
from .preview import is_text_file
from .references import DirectoryListing
from .ui_theme import UITheme

KIND_DIRECTORY = "dir"
KIND_TEXT = "text"
KIND_OTHER = "other"

HELP_ROWS: tuple[tuple[str, str], ...] = (
    ("<NER> [visu]", "show a text file, or the size of a directory or binary file"),
    ("<NER> .", "enter the directory designated by <NER>"),
    ("..", "go up one directory (never above the session root)"),
    ("<NER> copy", "stage an entry for copying; the copy is named <name>-copy"),
    ("<NER> cut", "stage an entry for moving; the source is removed on paste or exit"),
    ("past", "paste the staged entry into the current directory"),
    ("<NER> delete", "delete a file or directory and its annotations"),
    ("<NER> rename <name>", "rename an entry, keeping its annotations"),
    ("mkdir <name>", "create a directory"),
    ("touch <name>", "create an empty text file (.txt added when no extension)"),
    ("find <name>", "list files named <name> below the current directory"),
    ("<NER> + <text>", "append text to the entry's annotation"),
    ("<NER> -", "remove the entry's annotation"),
    ("<NER> note", "show the entry's annotation"),
    ("help", "show this help"),
    ("exit", "leave the shell (a pending cut is committed)"),
)


def paint(text: str, style: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def entry_kind(path: Path) -> str:
    """Classify an entry for listing colors."""
    if fs.is_directory(path):
        return KIND_DIRECTORY
    if fs.is_regular_file(path) and is_text_file(path):
        return KIND_TEXT
    return KIND_OTHER


def render_listing(listing: DirectoryListing, theme: UITheme) -> list[str]:
    """Render the numbered listing of one directory snapshot."""
    styles = {
        KIND_DIRECTORY: theme.listing_dir,
        KIND_TEXT: theme.listing_text,
        KIND_OTHER: theme.listing_other,
    }
    lines = [paint(f"Current directory: {listing.directory}", theme.header, theme), ""]
    if not listing.names:
        lines.append(paint("(empty directory)", theme.help_dim, theme))
        return lines
    width = len(str(len(listing.names)))
    for ref, name in listing.numbered():
        kind = entry_kind(listing.directory / name)
        number = paint(f"{ref:>{width}}", theme.listing_ref, theme)
        lines.append(f"{number} || {paint(name, styles[kind], theme)}")
    return lines


def render_status(current_ref: int | None, annotation: str, clipboard_label: str, theme: UITheme) -> list[str]:
    """Render the current-element, annotation and clipboard lines shown above the prompt."""
    if current_ref is None:
        element = "none"
    else:
        element = str(current_ref)
    lines = [f"{paint('Current element:', theme.status_label, theme)} {element}"]
    if annotation:
        lines.append(f"{paint('Annotation:', theme.status_label, theme)} {paint(annotation, theme.annotation, theme)}")
    else:
        lines.append(f"{paint('Annotation:', theme.status_label, theme)} {paint('none', theme.help_dim, theme)}")
    if clipboard_label:
        lines.append(f"{paint('Clipboard:', theme.status_label, theme)} {clipboard_label}")
    return lines


def render_help(theme: UITheme) -> list[str]:
    width = max(len(syntax) for syntax, _description in HELP_ROWS)
    lines = [paint("COMMANDS", theme.help_heading, theme)]
    for syntax, description in HELP_ROWS:
        lines.append(f"  {paint(syntax.ljust(width), theme.help_key, theme)}  {description}")
    lines.append("")
    lines.append(paint("<NER> is the number shown in front of an entry in the listing.", theme.help_dim, theme))
    lines.append(paint("Without <NER>, a command applies to the current element.", theme.help_dim, theme))
    return lines


def render_error(message: str, theme: UITheme) -> str:
    return paint(message, theme.error, theme)


def render_divider(width: int, theme: UITheme) -> str:
    return paint("-" * max(1, width), theme.divider, theme)


__all__ = [
    "HELP_ROWS",
    "KIND_DIRECTORY",
    "KIND_TEXT",
    "KIND_OTHER",
    "paint",
    "entry_kind",
    "render_listing",
    "render_status",
    "render_help",
    "render_error",
    "render_divider",
]
