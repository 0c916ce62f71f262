"""
Disk-backed annotation store.

This module owns every read and write of the annotations file.

- Default location: `ANNOTATE_FILE` env var or `~/.annotations.json`
- Format:           one JSON document mirroring `AnnotationCollection`
- Legacy format:    `<epoch-millis> <text>` per line, accepted on load and
                    rewritten as JSON by the next save

Persistence discipline
----------------------
`save()` writes to a sibling `*.tmp` file, fsyncs it and renames it over the
target, so an interrupted write leaves the previous file intact. `load()` never
modifies the file, even when it fails.

`add()` and `remove()` only touch the in-memory collection; callers decide when
to call `save()`.

Usage
-----
>>> store = AnnotationStore(tmp_path / "notes.json")
>>> notes = store.load()
>>> store.add(notes, "Buy milk")
>>> store.save(notes)
"""

from __future__ import annotations

import json
import os
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from .contracts.annotation import Annotation, AnnotationCollection
from .errors import EmptyText, NotFound, StorageCorrupt, StorageWriteFailure
from .settings import get_logger, load_settings

logger = get_logger("annotate.store")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _describe(exc: ValidationError) -> str:
    """Condense a Pydantic error into a single line for the user."""
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{where}: {msg}" if where else str(msg)


def _parse_legacy(raw: str) -> AnnotationCollection:
    """Build a collection from the `<epoch-millis> <text>` line format.

    Earlier releases appended lines without checking the clock, so records are
    stable-sorted by timestamp before ids are assigned by position. Blank lines
    carry no record and are skipped.
    """
    records: list[tuple[datetime, str]] = []
    for lineno, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue
        stamp, sep, text = line.partition(" ")
        if not sep or not stamp.isdecimal():
            raise ValueError(f"line {lineno}: expected '<epoch-millis> <text>'")
        records.append((datetime.fromtimestamp(int(stamp) / 1000, tz=UTC), text))

    records.sort(key=lambda record: record[0])
    notes = [
        {"id": index, "text": text, "created_at": created_at}
        for index, (created_at, text) in enumerate(records)
    ]
    return AnnotationCollection.model_validate({"next_id": len(notes), "annotations": notes})


class AnnotationStore:
    """Load, mutate and persist the annotation collection."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path if path is not None else load_settings().store_path

    # ------------------------------- Disk I/O -------------------------------

    def load(self) -> AnnotationCollection:
        """Read the persisted collection.

        Returns an empty collection when the file does not exist yet (first
        run). An existing but empty file is treated the same way.

        Raises
        ------
        StorageCorrupt
            The file exists but cannot be read or does not describe a valid
            collection.
        """
        if not self.path.exists():
            logger.debug("No annotations file at %s; starting empty", self.path)
            return AnnotationCollection()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read %s: %s", self.path, exc)
            raise StorageCorrupt(self.path, str(exc)) from exc

        if not raw.strip():
            return AnnotationCollection()

        try:
            if raw.lstrip().startswith("{"):
                collection = AnnotationCollection.model_validate(json.loads(raw))
            else:
                collection = _parse_legacy(raw)
                logger.info("Imported %d legacy annotations from %s", len(collection), self.path)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON in %s: %s", self.path, exc)
            raise StorageCorrupt(self.path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        except ValidationError as exc:
            logger.error("Invalid annotations in %s: %s", self.path, exc)
            raise StorageCorrupt(self.path, _describe(exc)) from exc
        except (ValueError, OverflowError, OSError) as exc:
            logger.error("Invalid legacy record in %s: %s", self.path, exc)
            raise StorageCorrupt(self.path, str(exc)) from exc

        logger.debug("Loaded %d annotations from %s", len(collection), self.path)
        return collection

    def save(self, collection: AnnotationCollection) -> None:
        """Atomically replace the persisted file with `collection`.

        Raises
        ------
        StorageWriteFailure
            Any OS-level error while writing; the previous file is untouched.
        """
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                f.write(collection.model_dump_json(indent=2))
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(self.path)
        except OSError as exc:
            logger.error("Failed to save %s: %s", self.path, exc)
            tmp.unlink(missing_ok=True)
            raise StorageWriteFailure(self.path, str(exc)) from exc
        logger.debug("Saved %d annotations to %s", len(collection), self.path)

    # ------------------------------ Collection ------------------------------

    def add(
        self,
        collection: AnnotationCollection,
        text: str,
        now: datetime | None = None,
    ) -> Annotation:
        """Append a new annotation with `text` and return it.

        `now` defaults to the current UTC instant. It is clamped to the newest
        existing timestamp so creation order and time order never disagree.

        Raises
        ------
        EmptyText
            `text` is empty or whitespace only; `collection` is unchanged.
        """
        if not text.strip():
            raise EmptyText()

        created_at = now if now is not None else _utcnow()
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        newest = collection.last()
        if newest is not None and created_at < newest.created_at:
            created_at = newest.created_at

        note = Annotation(id=collection.next_id, text=text, created_at=created_at)
        collection.annotations.append(note)
        collection.next_id += 1
        return note

    def get(self, collection: AnnotationCollection, annotation_id: int) -> Annotation:
        """Return the annotation with `annotation_id` or raise `NotFound`."""
        note = collection.find(annotation_id)
        if note is None:
            raise NotFound(annotation_id)
        return note

    def remove(self, collection: AnnotationCollection, annotation_id: int) -> Annotation:
        """Remove and return the annotation with `annotation_id`.

        Raises
        ------
        NotFound
            No such id; `collection` is unchanged.
        """
        note = self.get(collection, annotation_id)
        collection.annotations.remove(note)
        return note


__all__ = ["AnnotationStore"]
