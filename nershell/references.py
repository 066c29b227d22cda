"""Ordinal references ("NER") over a directory listing snapshot.

A reference is a 1-based position into the listing it was computed from and
means nothing once the directory changes. Listings are therefore taken fresh
right before each resolution and never memoized.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import OutOfRangeReference
from .fs import list_directory_entries


@dataclass(frozen=True)
class DirectoryListing:
    """Entry names of one directory, in filesystem order."""

    directory: Path
    names: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.names)

    def resolve(self, ref: int) -> str:
        return resolve(ref, self)

    def path_for(self, ref: int) -> Path:
        """Return the absolute path of the entry at ``ref``."""
        return self.directory / resolve(ref, self)

    def numbered(self) -> list[tuple[int, str]]:
        """Return ``(ref, name)`` pairs for display."""
        return [(idx, name) for idx, name in enumerate(self.names, start=1)]


def take_listing(directory: Path, show_hidden: bool = True) -> DirectoryListing:
    """List ``directory`` now and wrap the result as a snapshot."""
    return DirectoryListing(directory=directory, names=tuple(list_directory_entries(directory, show_hidden)))


def resolve(ref: int, listing: DirectoryListing) -> str:
    """Map ``ref`` onto an entry name of ``listing``.

    Raises ``OutOfRangeReference`` outside ``[1, len(listing)]``.
    """
    count = len(listing.names)
    if isinstance(ref, bool) or not isinstance(ref, int) or ref < 1 or ref > count:
        raise OutOfRangeReference(ref, count)
    return listing.names[ref - 1]


def parse_reference(token: str) -> int | None:
    """Return the ordinal written in ``token``, or ``None`` if it is not one."""
    stripped = token.strip()
    if not stripped or not stripped.lstrip("+-").isdigit():
        return None
    try:
        return int(stripped)
    except ValueError:
        return None


__all__ = ["DirectoryListing", "take_listing", "resolve", "parse_reference"]
