"""Single-slot clipboard for copy/cut/paste of files and directory subtrees.

State is an explicit tagged value, ``Empty`` or ``Pending``. Transitions:

- ``stage``: any state -> ``Pending`` (abandoning the previous entry first)
- ``paste``: ``Pending(COPY)`` -> same ``Pending``; ``Pending(CUT)`` -> ``Empty``
- ``abandon``: any state -> ``Empty``; a pending cut deletes its source

Annotations travel with a paste through the manifest captured at staging
time, so a paste replays what the source carried when it was staged.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import fs
from .annotations import AnnotationStore, ManifestEntry
from .errors import CopyFailure, FileOperationFailure, NoPendingClipboard
from .operations import delete_entry

logger = logging.getLogger(__name__)

COPY_SUFFIX = "-copy"


class Intent(enum.Enum):
    COPY = "copy"
    CUT = "cut"


@dataclass(frozen=True)
class Empty:
    """Nothing staged."""


@dataclass(frozen=True)
class Pending:
    """One staged source with the annotations it carried at staging time."""

    source: Path
    intent: Intent
    is_directory: bool
    manifest: tuple[ManifestEntry, ...]


ClipboardState = Empty | Pending

EMPTY = Empty()


def copy_name(name: str, is_directory: bool) -> str:
    """Return ``stem-copy.ext`` for files and ``name-copy`` for directories."""
    if is_directory:
        return name + COPY_SUFFIX
    stem, extension = os.path.splitext(name)
    return stem + COPY_SUFFIX + extension


def build_manifest(source: Path, store: AnnotationStore) -> tuple[tuple[ManifestEntry, ...], bool]:
    """Capture ``(relative path, annotation)`` for ``source`` and everything below it.

    Returns ``(manifest, is_directory)``. A file yields one entry named after
    the file; a directory yields itself as ``""`` followed by its subtree in
    top-down walk order.
    """
    if not fs.is_directory(source) or source.is_symlink():
        annotation = store.lookup(source)
        return (ManifestEntry(relative_path=source.name, annotation=annotation),), False

    relative_paths: list[str] = [""]
    try:
        for directory, dirnames, filenames in fs.walk(source):
            for name in [*dirnames, *filenames]:
                relative_paths.append(os.path.relpath(directory / name, source))
    except OSError as exc:
        raise FileOperationFailure(f"Cannot read directory {source}: {exc}") from exc

    absolute = [str(source / rel) if rel else str(source) for rel in relative_paths]
    annotations = store.lookup_many(absolute)
    manifest = tuple(
        ManifestEntry(relative_path=rel, annotation=annotations[key])
        for rel, key in zip(relative_paths, absolute)
    )
    return manifest, True


class ClipboardManager:
    """Holds at most one pending copy or cut and performs pastes."""

    def __init__(self, store: AnnotationStore) -> None:
        self.store = store
        self._state: ClipboardState = EMPTY

    @property
    def state(self) -> ClipboardState:
        return self._state

    @property
    def pending(self) -> Pending | None:
        return self._state if isinstance(self._state, Pending) else None

    def stage(self, source: Path, intent: Intent) -> Pending:
        """Stage ``source`` for a later paste, replacing any previous entry.

        A pending cut is committed (its source deleted) before the new manifest
        is captured, unless ``source`` is that cut's source or lies inside it,
        in which case the old cut is just dropped.
        """
        if not fs.exists(source):
            raise FileOperationFailure(f"Cannot {intent.value}: {source} does not exist.")

        previous = self.pending
        if previous is not None and previous.intent is Intent.CUT and source.is_relative_to(previous.source):
            logger.info("Dropping pending cut of %s: re-staged", previous.source)
            self._state = EMPTY
        else:
            self.abandon()

        manifest, is_directory = build_manifest(source, self.store)
        self._state = Pending(source=source, intent=intent, is_directory=is_directory, manifest=manifest)
        logger.info("Staged %s for %s (%d manifest entries)", source, intent.value, len(manifest))
        return self._state

    def abandon(self) -> Path | None:
        """Clear the slot; a pending cut deletes its source first.

        Returns the deleted source path, if any.
        """
        previous = self.pending
        if previous is None or previous.intent is not Intent.CUT:
            self._state = EMPTY
            return None
        try:
            if not fs.exists(previous.source):
                return None
            delete_entry(previous.source, self.store)
            logger.info("Committed abandoned cut: removed %s", previous.source)
            return previous.source
        finally:
            self._state = EMPTY

    def destination_for(self, pending: Pending, target_directory: Path) -> Path:
        """Compute where ``pending`` lands when pasted into ``target_directory``."""
        name = pending.source.name
        if pending.intent is Intent.CUT:
            return target_directory / name
        candidate = copy_name(name, pending.is_directory)
        while fs.exists(target_directory / candidate):
            candidate = copy_name(candidate, pending.is_directory)
        return target_directory / candidate

    def paste(self, target_directory: Path) -> Path:
        """Duplicate the staged source into ``target_directory``.

        Returns the destination path. Raises ``NoPendingClipboard`` when
        nothing is staged and ``CopyFailure`` when duplication fails; in the
        latter case partial output stays on disk and the slot is unchanged.
        """
        pending = self.pending
        if pending is None:
            raise NoPendingClipboard()
        source = pending.source
        if not fs.exists(source):
            raise CopyFailure(f"Cannot paste: {source} no longer exists.")

        destination = self.destination_for(pending, target_directory)
        if pending.intent is Intent.CUT and destination == source:
            logger.info("Cut of %s pasted onto itself; nothing to move", source)
            self._state = EMPTY
            return destination
        if pending.is_directory and target_directory.resolve().is_relative_to(source.resolve()):
            raise CopyFailure(f"Cannot paste directory {source.name} into itself.")

        try:
            if pending.is_directory:
                fs.copy_tree(source, destination)
            else:
                fs.copy_file_bytes(source, destination)
        except OSError as exc:
            raise CopyFailure(f"Copy of {source.name} to {destination} failed: {exc}") from exc

        self.store.copy_associations(self._destination_manifest(pending), destination)
        logger.info("Pasted %s to %s (%s)", source, destination, pending.intent.value)

        if pending.intent is Intent.CUT:
            try:
                delete_entry(source, self.store)
            finally:
                self._state = EMPTY
        return destination

    @staticmethod
    def _destination_manifest(pending: Pending) -> tuple[ManifestEntry, ...]:
        # A single file's manifest entry maps onto the destination path itself.
        if pending.is_directory:
            return pending.manifest
        return tuple(ManifestEntry(relative_path="", annotation=entry.annotation) for entry in pending.manifest)


__all__ = [
    "COPY_SUFFIX",
    "Intent",
    "Empty",
    "Pending",
    "ClipboardState",
    "EMPTY",
    "copy_name",
    "build_manifest",
    "ClipboardManager",
]
