"""
View models and user actions exchanged with the terminal UI.

The controller hands the UI plain, already-formatted rows; the UI answers with
one of a closed set of action values. Each action is a frozen dataclass so the
controller can match on its type without any lookup tables.

List view answers  : ViewDetail(id) | Create | Quit
Detail view answers: Delete | Back
"""

from __future__ import annotations

from dataclasses import dataclass

# ----- View models ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AnnotationRow:
    """One line of the list view."""

    annotation_id: int
    text: str
    relative: str


@dataclass(frozen=True, slots=True)
class AnnotationDetail:
    """Everything the detail view shows for a single annotation."""

    annotation_id: int
    text: str
    absolute: str
    relative: str


# ----- Actions ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ViewDetail:
    """Open the annotation with `annotation_id`."""

    annotation_id: int


@dataclass(frozen=True, slots=True)
class Create:
    """Ask for the text of a new annotation."""


@dataclass(frozen=True, slots=True)
class Quit:
    """Leave the interactive session."""


@dataclass(frozen=True, slots=True)
class Delete:
    """Delete the annotation currently shown."""


@dataclass(frozen=True, slots=True)
class Back:
    """Return to the list without changes."""


ListAction = ViewDetail | Create | Quit
DetailAction = Delete | Back


__all__ = [
    "AnnotationRow",
    "AnnotationDetail",
    "ViewDetail",
    "Create",
    "Quit",
    "Delete",
    "Back",
    "ListAction",
    "DetailAction",
]
