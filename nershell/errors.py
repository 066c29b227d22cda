"""Error taxonomy shared by the shell components.

Every error carries a short user-facing message. The session catches
``ShellError`` at the command boundary, prints the message and keeps running.
"""

from __future__ import annotations


class ShellError(Exception):
    """Base class for errors recovered at the command boundary."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class OutOfRangeReference(ShellError):
    """Ordinal outside ``[1, len(listing)]``."""

    def __init__(self, ref: int, count: int) -> None:
        super().__init__(f"Invalid reference: {ref} (listing has {count} entries).")
        self.ref = ref
        self.count = count


class RootBoundaryError(ShellError):
    """Ascend requested while already at the session root."""


class NoPendingClipboard(ShellError):
    """Paste requested with nothing staged."""

    def __init__(self) -> None:
        super().__init__("Nothing to paste: no file or directory has been copied or cut.")


class CopyFailure(ShellError):
    """I/O failure while duplicating a file or subtree.

    Partial output may remain on disk; the clipboard is left as it was.
    """


class AnnotationIOFailure(ShellError):
    """Annotation side-file could not be read, decoded or written."""


class FileOperationFailure(ShellError):
    """Create, delete, rename or read failed on the filesystem."""


class InvalidCommand(ShellError):
    """Unknown verb, missing argument, or an argument that does not fit the entry."""


__all__ = [
    "ShellError",
    "OutOfRangeReference",
    "RootBoundaryError",
    "NoPendingClipboard",
    "CopyFailure",
    "AnnotationIOFailure",
    "FileOperationFailure",
    "InvalidCommand",
]
