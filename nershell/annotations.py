"""Path-keyed annotations persisted in a JSON side-file.

The side-file is a JSON array of ``{"path": ..., "annotation": ...}`` objects.
Every call reads the whole file and every mutating call rewrites it, so each
operation sees edits made to the file between commands. Keys are compared as
plain strings: ``/a/./b`` and ``/a/b`` are distinct records.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import AnnotationIOFailure

logger = logging.getLogger(__name__)

PATH_KEY = "path"
TEXT_KEY = "annotation"


@dataclass(frozen=True)
class AnnotationRecord:
    """One persisted annotation."""

    path: str
    text: str


@dataclass(frozen=True)
class ManifestEntry:
    """Annotation captured for one path relative to a staged source.

    An empty ``relative_path`` designates the staged root itself.
    """

    relative_path: str
    annotation: str = ""


def is_within(key: str, root: str) -> bool:
    """Return whether ``key`` equals ``root`` or names a path below it.

    Matching honors path-segment boundaries: ``/data/ab`` is not below
    ``/data/a``.
    """
    if key == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return key.startswith(prefix)


def join_key(root: str, relative_path: str) -> str:
    if not relative_path:
        return root
    return str(Path(root) / relative_path)


class AnnotationStore:
    """Read-all/write-all annotation persistence.

    The in-memory working set is a ``dict`` built per call; insertion order
    follows file order so rewrites keep unrelated records in place.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # Persistence -----------------------------------------------------------------

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise AnnotationIOFailure(f"Cannot read annotation file {self.path}: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise AnnotationIOFailure(f"Annotation file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise AnnotationIOFailure(f"Annotation file {self.path} must hold a JSON array.")

        records: dict[str, str] = {}
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed annotation entry in %s: %r", self.path, item)
                continue
            key = item.get(PATH_KEY)
            text = item.get(TEXT_KEY, "")
            if not isinstance(key, str) or not isinstance(text, str):
                logger.warning("Skipping malformed annotation entry in %s: %r", self.path, item)
                continue
            if key in records:
                # Duplicate keys from hand edits fold into one record.
                records[key] += text
            else:
                records[key] = text
        return records

    def _save(self, records: dict[str, str]) -> None:
        payload = [{PATH_KEY: key, TEXT_KEY: text} for key, text in records.items()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as exc:
            raise AnnotationIOFailure(f"Cannot write annotation file {self.path}: {exc}") from exc

    # Queries ---------------------------------------------------------------------

    def records(self) -> list[AnnotationRecord]:
        return [AnnotationRecord(path=key, text=text) for key, text in self._load().items()]

    def lookup(self, path: str | Path) -> str:
        """Return the annotation for ``path`` or ``""`` when there is none."""
        return self._load().get(str(path), "")

    def lookup_many(self, paths: Iterable[str | Path]) -> dict[str, str]:
        """Look up several paths with a single read of the side-file."""
        records = self._load()
        return {str(path): records.get(str(path), "") for path in paths}

    # Mutations -------------------------------------------------------------------

    def add(self, path: str | Path, text: str) -> str:
        """Append ``text`` to the annotation of ``path``, creating it if needed.

        Returns the resulting annotation text.
        """
        key = str(path)
        records = self._load()
        records[key] = records.get(key, "") + text
        self._save(records)
        return records[key]

    def delete(self, path: str | Path) -> bool:
        """Remove the annotation of ``path``; returns whether one existed."""
        key = str(path)
        records = self._load()
        if key not in records:
            return False
        del records[key]
        self._save(records)
        return True

    def delete_subtree(self, root: str | Path) -> int:
        """Remove annotations of ``root`` and every path below it.

        Returns the number of removed records. The file is left untouched when
        nothing matches.
        """
        root_key = str(root)
        records = self._load()
        kept = {key: text for key, text in records.items() if not is_within(key, root_key)}
        removed = len(records) - len(kept)
        if removed:
            self._save(kept)
            logger.info("Removed %d annotation(s) under %s", removed, root_key)
        return removed

    def delete_paths(self, paths: Iterable[str | Path]) -> int:
        """Remove exactly the given keys in one rewrite."""
        doomed = {str(path) for path in paths}
        records = self._load()
        kept = {key: text for key, text in records.items() if key not in doomed}
        removed = len(records) - len(kept)
        if removed:
            self._save(kept)
        return removed

    def copy_associations(self, manifest: Iterable[ManifestEntry], destination_root: str | Path) -> int:
        """Write one record per non-empty manifest annotation under ``destination_root``.

        An existing record at a destination key is replaced. Returns the number
        of written records.
        """
        root_key = str(destination_root)
        records = self._load()
        written = 0
        for entry in manifest:
            if not entry.annotation:
                continue
            records[join_key(root_key, entry.relative_path)] = entry.annotation
            written += 1
        if written:
            self._save(records)
        return written

    def move_subtree(self, old_root: str | Path, new_root: str | Path) -> int:
        """Re-key ``old_root`` and its descendants under ``new_root``."""
        old_key = str(old_root)
        new_key = str(new_root)
        records = self._load()
        moved: dict[str, str] = {}
        count = 0
        for key, text in records.items():
            if is_within(key, old_key):
                key = new_key + key[len(old_key):]
                count += 1
            moved[key] = text
        if count:
            self._save(moved)
        return count


__all__ = [
    "AnnotationRecord",
    "AnnotationStore",
    "ManifestEntry",
    "is_within",
    "join_key",
    "PATH_KEY",
    "TEXT_KEY",
]
