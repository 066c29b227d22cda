"""Current-directory tracking bounded by the session root.

This module has no UI or filesystem concerns beyond path arithmetic; callers
verify that a target is a directory before descending into it.
"""

from __future__ import annotations

from pathlib import Path

from .errors import RootBoundaryError


class Navigator:
    """Owns the current directory and keeps it at or below ``root``."""

    def __init__(self, root: Path, start: Path | None = None) -> None:
        self.root = Path(root).absolute()
        current = Path(start).absolute() if start is not None else self.root
        if not current.is_relative_to(self.root):
            raise ValueError(f"start directory {current} is outside root {self.root}")
        self._current = current

    @property
    def current(self) -> Path:
        return self._current

    def at_root(self) -> bool:
        return self._current == self.root or self._current.parent == self._current

    def descend(self, name: str) -> Path:
        """Move into ``current / name`` without checking the target."""
        self._current = self._current / name
        return self._current

    def ascend(self) -> Path:
        """Move to the parent directory.

        Raises ``RootBoundaryError`` at the session root.
        """
        if self.at_root():
            raise RootBoundaryError(f"Already at the root directory {self.root}; there is no parent to go to.")
        self._current = self._current.parent
        return self._current


__all__ = ["Navigator"]
