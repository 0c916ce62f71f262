"""
Interactive session state machine.

States
------
- ``ListView``      : show every annotation, wait for a choice (initial state).
- ``DetailView(id)``: show one annotation, offer delete / back.
- ``CreatePrompt``  : ask for the text of a new annotation.
- ``Exit``          : terminal; the controller saves once more and returns.

Session state
-------------
The loaded `AnnotationCollection` is owned by the controller and threaded
through every transition as a value: ``step(state, collection)`` returns the
next state together with the collection the session should continue with.

Mutations are applied to a deep copy which only replaces the session value
once `AnnotationStore.save` succeeded. A failed save therefore leaves the
session exactly as it was before the action.

Rows are rebuilt from the collection and re-formatted against a fresh
``clock()`` reading every time the list is shown, so relative times are
never stale.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from annotate.core.contracts.annotation import Annotation, AnnotationCollection
from annotate.core.errors import EmptyText, NotFound, StorageWriteFailure
from annotate.core.humanize import format_absolute, format_relative
from annotate.core.settings import get_logger
from annotate.core.store import AnnotationStore

from .actions import (
    AnnotationDetail,
    AnnotationRow,
    Back,
    Create,
    Delete,
    Quit,
    ViewDetail,
)
from .terminal import TerminalUI

logger = get_logger("annotate.ui")

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ----- States -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ListView:
    """Show the list of annotations."""


@dataclass(frozen=True, slots=True)
class DetailView:
    """Show a single annotation."""

    annotation_id: int


@dataclass(frozen=True, slots=True)
class CreatePrompt:
    """Ask for the text of a new annotation."""


@dataclass(frozen=True, slots=True)
class Exit:
    """Terminal state."""


State = ListView | DetailView | CreatePrompt | Exit


# ----- View model builders ------------------------------------------------------


def build_rows(collection: AnnotationCollection, now: datetime) -> list[AnnotationRow]:
    """Format every annotation for the list view, in creation order."""
    return [
        AnnotationRow(
            annotation_id=note.id,
            text=note.text,
            relative=format_relative(note.created_at, now),
        )
        for note in collection.annotations
    ]


def build_detail(note: Annotation, now: datetime) -> AnnotationDetail:
    """Format one annotation for the detail view."""
    return AnnotationDetail(
        annotation_id=note.id,
        text=note.text,
        absolute=format_absolute(note.created_at),
        relative=format_relative(note.created_at, now),
    )


# ----- Controller ---------------------------------------------------------------


class InteractionController:
    """Drive the interactive session between a store and a terminal UI."""

    def __init__(
        self,
        store: AnnotationStore,
        ui: TerminalUI,
        clock: Clock = _utcnow,
    ) -> None:
        self.store = store
        self.ui = ui
        self.clock = clock

    def run(self, collection: AnnotationCollection) -> AnnotationCollection:
        """Run until the user quits and return the final collection.

        Raises
        ------
        StorageWriteFailure
            The closing save failed. Earlier mutations were already saved
            when they happened.
        """
        state: State = ListView()
        while not isinstance(state, Exit):
            state, collection = self.step(state, collection)
        self.store.save(collection)
        logger.debug("Session closed with %d annotations", len(collection))
        return collection

    def step(
        self, state: State, collection: AnnotationCollection
    ) -> tuple[State, AnnotationCollection]:
        """Perform one transition from `state`."""
        logger.debug("Entering %s", type(state).__name__)
        if isinstance(state, ListView):
            return self._list_view(collection), collection
        if isinstance(state, DetailView):
            return self._detail_view(state, collection)
        if isinstance(state, CreatePrompt):
            return self._create_prompt(collection)
        if isinstance(state, Exit):
            return state, collection
        raise TypeError(f"Unknown controller state: {state!r}")

    # ------------------------------ Transitions -----------------------------

    def _list_view(self, collection: AnnotationCollection) -> State:
        rows = build_rows(collection, self.clock())
        action = self.ui.choose(rows)
        if isinstance(action, ViewDetail):
            return DetailView(action.annotation_id)
        if isinstance(action, Create):
            return CreatePrompt()
        if isinstance(action, Quit):
            return Exit()
        raise TypeError(f"Unknown list action: {action!r}")

    def _detail_view(
        self, state: DetailView, collection: AnnotationCollection
    ) -> tuple[State, AnnotationCollection]:
        try:
            note = self.store.get(collection, state.annotation_id)
        except NotFound as exc:
            logger.warning("%s", exc)
            self.ui.notify(str(exc), error=True)
            return ListView(), collection

        action = self.ui.show_detail(build_detail(note, self.clock()))
        if isinstance(action, Back):
            return ListView(), collection
        if isinstance(action, Delete):
            updated = self._commit(
                collection, lambda draft: self.store.remove(draft, state.annotation_id)
            )
            if updated is not collection:
                self.ui.notify(f"Deleted annotation #{state.annotation_id}.")
            return ListView(), updated
        raise TypeError(f"Unknown detail action: {action!r}")

    def _create_prompt(
        self, collection: AnnotationCollection
    ) -> tuple[State, AnnotationCollection]:
        text = self.ui.prompt_text()
        try:
            updated = self._commit(
                collection, lambda draft: self.store.add(draft, text, now=self.clock())
            )
        except EmptyText:
            # Blank input cancels the prompt; nothing is written.
            logger.debug("Create prompt cancelled")
            return ListView(), collection
        return ListView(), updated

    # -------------------------------- Helpers -------------------------------

    def _commit(
        self,
        collection: AnnotationCollection,
        mutate: Callable[[AnnotationCollection], object],
    ) -> AnnotationCollection:
        """Apply `mutate` to a copy, save it and return the copy.

        Errors raised by `mutate` propagate with `collection` untouched. A
        failed save is reported and the original `collection` is returned.
        """
        draft = collection.model_copy(deep=True)
        mutate(draft)
        try:
            self.store.save(draft)
        except StorageWriteFailure as exc:
            self.ui.notify(f"{exc} The change was not kept.", error=True)
            return collection
        return draft


__all__ = [
    "InteractionController",
    "ListView",
    "DetailView",
    "CreatePrompt",
    "Exit",
    "State",
    "build_rows",
    "build_detail",
]
