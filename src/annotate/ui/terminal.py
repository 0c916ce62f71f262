"""
Terminal front-end for the interactive session.

This module defines the `TerminalUI` protocol the controller talks to and the
`RichTerminal` implementation built on `rich` (Table, Panel, Prompt, Confirm).

Input conventions
-----------------
- List view: type an annotation id to open it, `n` for a new one, `q` to quit.
- Detail view: `d` deletes (after confirmation), `b` goes back.
- Create prompt: an empty line cancels.
- EOF / Ctrl-C: quit from the list, back from the detail view, cancel from
  the create prompt.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from .actions import (
    AnnotationDetail,
    AnnotationRow,
    Back,
    Create,
    Delete,
    DetailAction,
    ListAction,
    Quit,
    ViewDetail,
)

EMPTY_LIST_MESSAGE = "You have not registered any annotation!"
EMPTY_LIST_HINT = "Try: annotate [text]"


class TerminalUI(Protocol):
    """What the controller needs from a terminal front-end."""

    def choose(self, rows: Sequence[AnnotationRow]) -> ListAction: ...

    def show_detail(self, detail: AnnotationDetail) -> DetailAction: ...

    def prompt_text(self) -> str: ...

    def notify(self, message: str, *, error: bool = False) -> None: ...


def parse_list_choice(answer: str, ids: Sequence[int]) -> ListAction | None:
    """Map a raw list-view answer to an action, or None if it means nothing.

    Ids that are not currently listed are rejected here, so a typo never
    reaches the detail view.
    """
    choice = answer.strip().lower()
    if choice in ("q", "quit"):
        return Quit()
    if choice in ("n", "new"):
        return Create()
    if choice.startswith("#"):
        choice = choice[1:]
    if choice.isdecimal() and int(choice) in ids:
        return ViewDetail(int(choice))
    return None


def build_table(rows: Sequence[AnnotationRow]) -> Table:
    """Render list rows as a rich table (newest at the bottom)."""
    table = Table(title="Annotations", expand=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("When", justify="right", style="dim", no_wrap=True)
    table.add_column("Annotation")
    for row in rows:
        # Text() keeps user content from being parsed as rich markup.
        table.add_row(str(row.annotation_id), row.relative, Text(row.text))
    return table


class RichTerminal:
    """`TerminalUI` implementation that renders with rich and reads stdin."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def choose(self, rows: Sequence[AnnotationRow]) -> ListAction:
        self.console.print()
        if rows:
            self.console.print(build_table(rows))
        else:
            self.console.print(
                Panel(
                    Text.assemble(EMPTY_LIST_MESSAGE, "\n", (EMPTY_LIST_HINT, "dim")),
                    title="Annotations",
                    border_style="cyan",
                )
            )

        ids = [row.annotation_id for row in rows]
        hint = "[bold]n[/bold]ew, [bold]q[/bold]uit"
        if rows:
            hint = "[bold]#[/bold] to open, " + hint
        while True:
            try:
                answer = Prompt.ask(hint, console=self.console, default="", show_default=False)
            except (EOFError, KeyboardInterrupt):
                return Quit()
            action = parse_list_choice(answer, ids)
            if action is not None:
                return action
            if answer.strip():
                self.console.print(f"[red]Unknown choice:[/red] {escape(answer.strip())}")

    def show_detail(self, detail: AnnotationDetail) -> DetailAction:
        self.console.print(
            Panel(
                Text(detail.text),
                title=f"Annotation #{detail.annotation_id}",
                subtitle=f"{detail.absolute} ({detail.relative})",
                border_style="green",
            )
        )
        try:
            choice = Prompt.ask(
                "[bold]d[/bold]elete or [bold]b[/bold]ack",
                console=self.console,
                choices=["d", "b"],
                default="b",
                show_choices=False,
            )
            if choice == "d" and Confirm.ask(
                "Delete this annotation?", console=self.console, default=False
            ):
                return Delete()
        except (EOFError, KeyboardInterrupt):
            return Back()
        return Back()

    def prompt_text(self) -> str:
        # console.input keeps surrounding whitespace; Prompt.ask would strip it.
        try:
            return self.console.input("New annotation [dim](empty to cancel)[/dim]: ")
        except (EOFError, KeyboardInterrupt):
            return ""

    def notify(self, message: str, *, error: bool = False) -> None:
        style = "bold red" if error else "yellow"
        self.console.print(Text(message, style=style))


__all__ = [
    "TerminalUI",
    "RichTerminal",
    "parse_list_choice",
    "build_table",
    "EMPTY_LIST_MESSAGE",
    "EMPTY_LIST_HINT",
]
