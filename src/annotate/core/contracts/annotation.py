"""Annotation contracts: a single note and the ordered collection that owns it.

This module defines two Pydantic v2 models:

- `Annotation`           : one piece of user text stamped with its creation time.
- `AnnotationCollection` : the persisted document, i.e. annotations in creation
  order plus the counter that hands out ids.

Identifiers
-----------
Ids come from `AnnotationCollection.next_id`, a monotonic counter persisted
with the document. An id is never reused, so it keeps pointing at the same
annotation after other entries are deleted or the file is reloaded.

Timestamps
----------
`created_at` is always a timezone-aware UTC datetime. Naive values coming from
hand-edited files are interpreted as UTC.

Notes
-----
- Validation here is what turns a malformed file into `StorageCorrupt`.
- In-place list mutation is not re-validated by Pydantic; the store checks
  its own invariants when adding.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

SCHEMA_VERSION = 1


class Annotation(BaseModel):
    """A short note recorded by the user."""

    id: int = Field(ge=0, description="Stable identifier, unique within the collection")
    text: str = Field(description="Verbatim user text; never blank")
    created_at: datetime = Field(description="UTC instant the annotation was recorded")

    @field_validator("text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("annotation text must not be empty")
        return v

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class AnnotationCollection(BaseModel):
    """Annotations in creation order, as persisted on disk."""

    version: Literal[1] = 1
    next_id: int = Field(default=0, ge=0, description="Id handed to the next annotation")
    annotations: list[Annotation] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_invariants(self) -> AnnotationCollection:
        """Reject duplicate ids, ids ahead of the counter and out-of-order timestamps."""
        seen: set[int] = set()
        previous: datetime | None = None
        for note in self.annotations:
            if note.id in seen:
                raise ValueError(f"duplicate annotation id {note.id}")
            if note.id >= self.next_id:
                raise ValueError(f"annotation id {note.id} is not below next_id {self.next_id}")
            if previous is not None and note.created_at < previous:
                raise ValueError(f"annotation {note.id} is older than the one before it")
            seen.add(note.id)
            previous = note.created_at
        return self

    def find(self, annotation_id: int) -> Annotation | None:
        """Return the annotation with `annotation_id`, or None."""
        for note in self.annotations:
            if note.id == annotation_id:
                return note
        return None

    def last(self) -> Annotation | None:
        """Return the most recently created annotation, if any."""
        return self.annotations[-1] if self.annotations else None

    def __len__(self) -> int:
        return len(self.annotations)


__all__ = ["Annotation", "AnnotationCollection", "SCHEMA_VERSION"]
