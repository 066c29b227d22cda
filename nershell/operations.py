"""Filesystem mutations that keep the annotation store consistent.

Each operation translates ``OSError`` into ``FileOperationFailure`` so the
session can report it and continue.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import fs
from .annotations import AnnotationStore
from .errors import FileOperationFailure, InvalidCommand

logger = logging.getLogger(__name__)

TEXT_FILE_SUFFIX = ".txt"


def _validate_entry_name(name: str) -> str:
    stripped = name.strip()
    if not stripped or stripped in {".", ".."}:
        raise InvalidCommand(f"Invalid name: {name!r}.")
    if os.sep in stripped or (os.altsep and os.altsep in stripped):
        raise InvalidCommand(f"Name must not contain a path separator: {name!r}.")
    return stripped


def delete_entry(path: Path, store: AnnotationStore) -> None:
    """Delete a file or directory subtree and purge its annotations.

    When deletion stops half-way, annotations of the entries already removed
    are purged before ``FileOperationFailure`` is raised.
    """
    removed: list[Path] = []
    try:
        fs.delete_tree(path, removed.append)
    except OSError as exc:
        if removed:
            store.delete_paths(removed)
        raise FileOperationFailure(f"Could not delete {path}: {exc}") from exc
    store.delete_subtree(path)
    logger.info("Deleted %s", path)


def rename_entry(path: Path, new_name: str, store: AnnotationStore) -> Path:
    """Rename ``path`` inside its directory and re-key its annotations."""
    new_name = _validate_entry_name(new_name)
    target = path.parent / new_name
    if target == path:
        return path
    if fs.exists(target):
        raise FileOperationFailure(f"Cannot rename: {target.name} already exists.")
    try:
        fs.rename(path, target)
    except OSError as exc:
        raise FileOperationFailure(f"Could not rename {path.name}: {exc}") from exc
    store.move_subtree(path, target)
    logger.info("Renamed %s to %s", path, target)
    return target


def make_directory(directory: Path, name: str) -> Path:
    target = directory / _validate_entry_name(name)
    if fs.exists(target):
        raise FileOperationFailure(f"Directory {target.name} already exists.")
    try:
        fs.create_directory(target)
    except OSError as exc:
        raise FileOperationFailure(f"Could not create directory {target.name}: {exc}") from exc
    return target


def make_text_file(directory: Path, name: str) -> Path:
    """Create an empty text file; ``.txt`` is appended when ``name`` has no extension."""
    name = _validate_entry_name(name)
    if not os.path.splitext(name)[1]:
        name += TEXT_FILE_SUFFIX
    target = directory / name
    if fs.exists(target):
        raise FileOperationFailure(f"File {target.name} already exists.")
    try:
        fs.create_empty_file(target)
    except OSError as exc:
        raise FileOperationFailure(f"Could not create file {target.name}: {exc}") from exc
    return target


def find_files(directory: Path, name: str) -> list[Path]:
    """Return regular files named exactly ``name`` below ``directory``."""
    wanted = name.strip()
    if not wanted:
        return []
    matches: list[Path] = []
    try:
        for current, _dirnames, filenames in fs.walk(directory):
            if wanted in filenames and fs.is_regular_file(current / wanted):
                matches.append(current / wanted)
    except OSError as exc:
        raise FileOperationFailure(f"Search stopped in {directory}: {exc}") from exc
    return sorted(matches)


__all__ = [
    "TEXT_FILE_SUFFIX",
    "delete_entry",
    "rename_entry",
    "make_directory",
    "make_text_file",
    "find_files",
]
