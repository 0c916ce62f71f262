"""
Error taxonomy for annotation storage and editing.

All errors inherit from AnnotateError so the CLI can report any of them with a
single handler. Two of them are recoverable inside an interactive session
(EmptyText, NotFound); the storage errors end the triggering action.
"""

from __future__ import annotations

from pathlib import Path


class AnnotateError(Exception):
    """Base exception for all annotate failures."""


class EmptyText(AnnotateError):
    """Raised when an annotation would be created from blank text."""

    def __init__(self) -> None:
        super().__init__("Annotation text must not be empty.")


class NotFound(AnnotateError):
    """Raised when no annotation carries the requested id."""

    def __init__(self, annotation_id: int) -> None:
        self.annotation_id = annotation_id
        super().__init__(f"No annotation with id #{annotation_id}.")


class StorageCorrupt(AnnotateError):
    """Raised when the persisted file exists but cannot be read or parsed.

    The file is left exactly as found so the user can inspect or repair it.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Annotations file {path} is unreadable: {reason}")


class StorageWriteFailure(AnnotateError):
    """Raised when the collection could not be written back to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save annotations to {path}: {reason}")


__all__ = [
    "AnnotateError",
    "EmptyText",
    "NotFound",
    "StorageCorrupt",
    "StorageWriteFailure",
]
