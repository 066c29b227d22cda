"""Filesystem primitives used by the shell.

Thin wrappers over ``os``/``shutil``/``pathlib`` with no state of their own.
Errors propagate as ``OSError``; callers translate them into shell errors.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path


def list_directory_entries(directory: Path, show_hidden: bool = True) -> list[str]:
    """Return entry names of ``directory`` in the order the OS reports them.

    The order is left unsorted; references are positions in this exact
    sequence.
    """
    names = os.listdir(directory)
    if show_hidden:
        return names
    return [name for name in names if not name.startswith(".")]


def is_directory(path: Path) -> bool:
    return path.is_dir()


def is_regular_file(path: Path) -> bool:
    return path.is_file()


def exists(path: Path) -> bool:
    """Return whether ``path`` exists, counting dangling symlinks."""
    return os.path.lexists(path)


def copy_file_bytes(source: Path, destination: Path) -> None:
    """Copy file content and metadata, refusing to overwrite ``destination``."""
    if exists(destination):
        raise FileExistsError(f"destination already exists: {destination}")
    shutil.copy2(source, destination, follow_symlinks=False)


def copy_tree(source: Path, destination: Path) -> None:
    """Recursively duplicate ``source`` into the new directory ``destination``."""
    shutil.copytree(source, destination, symlinks=True)


def create_directory(path: Path) -> None:
    path.mkdir()


def create_empty_file(path: Path) -> None:
    """Create an empty file, failing if ``path`` already exists."""
    with path.open("x", encoding="utf-8"):
        pass


def delete_file(path: Path) -> None:
    path.unlink()


def delete_empty_directory(path: Path) -> None:
    path.rmdir()


def rename(source: Path, destination: Path) -> None:
    source.rename(destination)


def walk(root: Path) -> Iterator[tuple[Path, list[str], list[str]]]:
    """Yield ``(directory, dirnames, filenames)`` top-down below ``root``.

    Symlinked directories are reported as names but not followed. Walk errors
    are raised instead of being skipped.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    for directory, dirnames, filenames in os.walk(root, onerror=_raise):
        yield Path(directory), dirnames, filenames


def delete_tree(path: Path, on_removed: Callable[[Path], None] | None = None) -> None:
    """Delete a file or a directory subtree bottom-up.

    ``on_removed`` is called for every path once it is gone, so callers can
    account for partial progress when an ``OSError`` interrupts the walk.
    """
    if path.is_dir() and not path.is_symlink():
        with os.scandir(path) as entries:
            children = [Path(entry.path) for entry in entries]
        for child in children:
            delete_tree(child, on_removed)
        delete_empty_directory(path)
    else:
        delete_file(path)
    if on_removed is not None:
        on_removed(path)


def file_size(path: Path) -> int:
    return int(path.stat().st_size)


def tree_size(root: Path) -> int:
    """Return the summed size of regular files below ``root``."""
    total = 0
    for directory, _dirnames, filenames in walk(root):
        for name in filenames:
            try:
                total += int((directory / name).stat(follow_symlinks=False).st_size)
            except OSError:
                continue
    return total


__all__ = [
    "list_directory_entries",
    "is_directory",
    "is_regular_file",
    "exists",
    "copy_file_bytes",
    "copy_tree",
    "create_directory",
    "create_empty_file",
    "delete_file",
    "delete_empty_directory",
    "rename",
    "walk",
    "delete_tree",
    "file_size",
    "tree_size",
]
