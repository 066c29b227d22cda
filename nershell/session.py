"""One interactive session: command dispatch over navigator, clipboard and annotations.

The directory is re-listed before every reference is resolved, so a number
always refers to the listing as it is when the command runs. Every
``ShellError`` (and any stray ``OSError``) is turned into an error line; a
failing command never ends the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import fs
from .annotations import AnnotationStore
from .clipboard import ClipboardManager, Intent
from .commands import (
    NAME_GUARDED_VERBS,
    VERB_ANNOTATE,
    VERB_COPY,
    VERB_CUT,
    VERB_DELETE,
    VERB_ENTER,
    VERB_EXIT,
    VERB_FIND,
    VERB_HELP,
    VERB_MKDIR,
    VERB_NOTE,
    VERB_PASTE,
    VERB_RENAME,
    VERB_TOUCH,
    VERB_UNANNOTATE,
    VERB_UP,
    VERB_VIEW,
    Command,
    parse_command,
)
from .errors import FileOperationFailure, InvalidCommand, OutOfRangeReference, ShellError
from .navigation import Navigator
from .operations import delete_entry, find_files, make_directory, make_text_file, rename_entry
from .preview import DEFAULT_STYLE, describe_entry
from .references import DirectoryListing, take_listing
from .render import render_error, render_help, render_listing, render_status
from .ui_theme import PLAIN_THEME, UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Output lines of one command and whether the shell should keep reading."""

    lines: tuple[str, ...] = ()
    keep_running: bool = True


class Session:
    """State of one shell session rooted at ``navigator.root``."""

    def __init__(
        self,
        navigator: Navigator,
        store: AnnotationStore,
        clipboard: ClipboardManager | None = None,
        *,
        show_hidden: bool = True,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
        theme: UITheme = PLAIN_THEME,
    ) -> None:
        self.navigator = navigator
        self.store = store
        self.clipboard = clipboard if clipboard is not None else ClipboardManager(store)
        self.show_hidden = show_hidden
        self.style = style
        self.no_color = no_color
        self.theme = theme
        self.current_ref: int | None = None
        self.closed = False
        self._handlers: dict[str, Callable[[Command], list[str]]] = {
            VERB_VIEW: self._view,
            VERB_ENTER: self._enter,
            VERB_UP: self._up,
            VERB_COPY: self._copy,
            VERB_CUT: self._cut,
            VERB_PASTE: self._paste,
            VERB_DELETE: self._delete,
            VERB_RENAME: self._rename,
            VERB_MKDIR: self._mkdir,
            VERB_TOUCH: self._touch,
            VERB_FIND: self._find,
            VERB_ANNOTATE: self._annotate,
            VERB_UNANNOTATE: self._unannotate,
            VERB_NOTE: self._note,
            VERB_HELP: self._help,
        }

    # Screen ----------------------------------------------------------------------

    def listing(self) -> DirectoryListing:
        """List the current directory now."""
        directory = self.navigator.current
        try:
            return take_listing(directory, self.show_hidden)
        except OSError as exc:
            raise FileOperationFailure(f"Cannot list {directory}: {exc}") from exc

    def screen_lines(self) -> list[str]:
        """Render the listing and the status block shown before each prompt."""
        try:
            listing = self.listing()
        except ShellError as exc:
            return [render_error(exc.message, self.theme)]
        lines = render_listing(listing, self.theme)
        lines.append("")
        lines.extend(render_status(self._visible_ref(listing), self._current_annotation(listing), self._clipboard_label(), self.theme))
        return lines

    def _visible_ref(self, listing: DirectoryListing) -> int | None:
        if self.current_ref is None or not 1 <= self.current_ref <= len(listing):
            return None
        return self.current_ref

    def _current_annotation(self, listing: DirectoryListing) -> str:
        ref = self._visible_ref(listing)
        if ref is None:
            return ""
        try:
            return self.store.lookup(listing.path_for(ref))
        except ShellError as exc:
            logger.warning("%s", exc.message)
            return ""

    def _clipboard_label(self) -> str:
        pending = self.clipboard.pending
        if pending is None:
            return ""
        return f"{pending.intent.value} of {pending.source}"

    # Dispatch --------------------------------------------------------------------

    def execute(self, line: str) -> CommandResult:
        """Run one input line and return its output."""
        command = parse_command(line)
        if command.is_empty:
            return CommandResult()
        if command.verb == VERB_EXIT:
            return CommandResult(lines=tuple(self.close()), keep_running=False)

        handler = self._handlers.get(command.verb)
        try:
            if handler is None:
                raise InvalidCommand(f"Unknown command: {command.verb!r}. Type 'help' for the list of commands.")
            return CommandResult(lines=tuple(handler(command)))
        except ShellError as exc:
            logger.info("Command %r failed: %s", line, exc.message)
            return CommandResult(lines=(render_error(exc.message, self.theme),))
        except OSError as exc:
            logger.warning("Command %r hit an unexpected I/O error: %s", line, exc)
            return CommandResult(lines=(render_error(f"I/O error: {exc}", self.theme),))

    def close(self) -> list[str]:
        """End the session, committing a pending cut. Safe to call twice."""
        if self.closed:
            return []
        self.closed = True
        lines: list[str] = []
        try:
            removed = self.clipboard.abandon()
        except ShellError as exc:
            logger.warning("Pending cut could not be committed: %s", exc.message)
            lines.append(render_error(exc.message, self.theme))
        else:
            if removed is not None:
                lines.append(f"Cut entry {removed.name} was never pasted and has been removed.")
        lines.append("Goodbye!")
        return lines

    # Helpers ---------------------------------------------------------------------

    def _target(self, command: Command) -> Path:
        """Resolve the command's reference (or the current element) to a path."""
        ref = command.ref if command.ref is not None else self.current_ref
        if ref is None:
            raise InvalidCommand("No current element: start the command with an entry number.")
        listing = self.listing()
        try:
            name = listing.resolve(ref)
        except OutOfRangeReference:
            if command.ref is None:
                self.current_ref = None
            raise
        self.current_ref = ref
        if command.verb in NAME_GUARDED_VERBS and command.argument and command.argument != name:
            raise InvalidCommand(f"Name {command.argument!r} does not match entry {ref} ({name}).")
        return listing.directory / name

    @staticmethod
    def _require_argument(command: Command, what: str) -> str:
        if not command.argument:
            raise InvalidCommand(f"Missing {what}.")
        return command.argument

    # Handlers --------------------------------------------------------------------

    def _view(self, command: Command) -> list[str]:
        path = self._target(command)
        text = describe_entry(path, style=self.style, no_color=self.no_color)
        if not text:
            return [f"{path.name} is empty."]
        return text.splitlines()

    def _enter(self, command: Command) -> list[str]:
        path = self._target(command)
        if not fs.is_directory(path):
            raise InvalidCommand(f"{path.name} is not a directory.")
        self.navigator.descend(path.name)
        self.current_ref = None
        return []

    def _up(self, command: Command) -> list[str]:
        self.navigator.ascend()
        self.current_ref = None
        return []

    def _stage(self, command: Command, intent: Intent) -> list[str]:
        path = self._target(command)
        previous = self.clipboard.pending
        self.clipboard.stage(path, intent)
        lines: list[str] = []
        if previous is not None and previous.intent is Intent.CUT and not fs.exists(previous.source):
            lines.append(f"Previously cut entry {previous.source.name} has been removed.")
        verb = "Copied" if intent is Intent.COPY else "Cut"
        lines.append(f"{verb} {path.name}; use 'past' to paste it.")
        return lines

    def _copy(self, command: Command) -> list[str]:
        return self._stage(command, Intent.COPY)

    def _cut(self, command: Command) -> list[str]:
        return self._stage(command, Intent.CUT)

    def _paste(self, command: Command) -> list[str]:
        destination = self.clipboard.paste(self.navigator.current)
        return [f"Pasted as {destination.name}."]

    def _delete(self, command: Command) -> list[str]:
        path = self._target(command)
        self.current_ref = None
        delete_entry(path, self.store)
        return [f"Deleted {path.name}."]

    def _rename(self, command: Command) -> list[str]:
        new_name = self._require_argument(command, "new name")
        path = self._target(command)
        target = rename_entry(path, new_name, self.store)
        self.current_ref = None
        return [f"Renamed {path.name} to {target.name}."]

    def _mkdir(self, command: Command) -> list[str]:
        name = self._require_argument(command, "directory name")
        target = make_directory(self.navigator.current, name)
        return [f"Created directory {target.name}."]

    def _touch(self, command: Command) -> list[str]:
        name = self._require_argument(command, "file name")
        target = make_text_file(self.navigator.current, name)
        return [f"Created file {target.name}."]

    def _find(self, command: Command) -> list[str]:
        name = self._require_argument(command, "file name")
        matches = find_files(self.navigator.current, name)
        if not matches:
            return [f"No file named {name} below {self.navigator.current}."]
        return [str(match) for match in matches]

    def _annotate(self, command: Command) -> list[str]:
        text = self._require_argument(command, "annotation text")
        path = self._target(command)
        combined = self.store.add(path, text)
        return [f"Annotation for {path.name}: {combined}"]

    def _unannotate(self, command: Command) -> list[str]:
        path = self._target(command)
        if self.store.delete(path):
            return [f"Annotation removed from {path.name}."]
        return [f"{path.name} has no annotation."]

    def _note(self, command: Command) -> list[str]:
        path = self._target(command)
        text = self.store.lookup(path)
        if not text:
            return [f"{path.name} has no annotation."]
        return [text]

    def _help(self, command: Command) -> list[str]:
        return render_help(self.theme)


__all__ = ["CommandResult", "Session"]
