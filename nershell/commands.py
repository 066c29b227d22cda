"""Parse one input line into a command.

Grammar: ``<ref> [verb] [argument]`` or ``<verb> [argument]``. The argument
keeps its inner whitespace so annotations and names may contain spaces.
"""

from __future__ import annotations

from dataclasses import dataclass

from .references import parse_reference

VERB_VIEW = "visu"
VERB_ENTER = "."
VERB_UP = ".."
VERB_COPY = "copy"
VERB_CUT = "cut"
VERB_PASTE = "paste"
VERB_DELETE = "delete"
VERB_RENAME = "rename"
VERB_MKDIR = "mkdir"
VERB_TOUCH = "touch"
VERB_FIND = "find"
VERB_ANNOTATE = "+"
VERB_UNANNOTATE = "-"
VERB_NOTE = "note"
VERB_HELP = "help"
VERB_EXIT = "exit"

VERB_ALIASES: dict[str, str] = {
    "past": VERB_PASTE,
    "quit": VERB_EXIT,
    "?": VERB_HELP,
}

KNOWN_VERBS = frozenset(
    {
        VERB_VIEW,
        VERB_ENTER,
        VERB_UP,
        VERB_COPY,
        VERB_CUT,
        VERB_PASTE,
        VERB_DELETE,
        VERB_RENAME,
        VERB_MKDIR,
        VERB_TOUCH,
        VERB_FIND,
        VERB_ANNOTATE,
        VERB_UNANNOTATE,
        VERB_NOTE,
        VERB_HELP,
        VERB_EXIT,
    }
)

# Verbs whose optional argument must repeat the entry name.
NAME_GUARDED_VERBS = frozenset({VERB_VIEW, VERB_ENTER, VERB_COPY, VERB_CUT})


@dataclass(frozen=True)
class Command:
    """Parsed input line; ``ref`` is ``None`` when no ordinal was given."""

    verb: str
    ref: int | None = None
    argument: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.verb and self.ref is None


def normalize_verb(verb: str) -> str:
    lowered = verb.strip().lower()
    return VERB_ALIASES.get(lowered, lowered)


def parse_command(line: str) -> Command:
    """Split ``line`` into reference, verb and argument."""
    stripped = line.strip()
    if not stripped:
        return Command(verb="")

    head, rest = _split_head(stripped)
    ref = parse_reference(head)
    if ref is None:
        return Command(verb=normalize_verb(head), argument=rest)

    if not rest:
        return Command(verb=VERB_VIEW, ref=ref)
    verb, argument = _split_head(rest)
    return Command(verb=normalize_verb(verb), ref=ref, argument=argument)


def _split_head(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


__all__ = [
    "Command",
    "KNOWN_VERBS",
    "NAME_GUARDED_VERBS",
    "VERB_ALIASES",
    "normalize_verb",
    "parse_command",
    "VERB_VIEW",
    "VERB_ENTER",
    "VERB_UP",
    "VERB_COPY",
    "VERB_CUT",
    "VERB_PASTE",
    "VERB_DELETE",
    "VERB_RENAME",
    "VERB_MKDIR",
    "VERB_TOUCH",
    "VERB_FIND",
    "VERB_ANNOTATE",
    "VERB_UNANNOTATE",
    "VERB_NOTE",
    "VERB_HELP",
    "VERB_EXIT",
]
