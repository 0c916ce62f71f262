# src/annotate/cli.py
"""
annotate Command Line Interface (CLI).

This module implements the user-facing entry point using `typer` and `rich`.

Modes
-----
- **One-shot**: any positional words are joined into one annotation, saved,
  and the process exits.
- **Interactive**: with no words, the stored annotations are listed and can be
  opened, deleted or added to until the user quits.

Usage
-----
    # Record an annotation
    $ annotate remember to water the plants

    # Browse what has been recorded
    $ annotate

    # Use a different store file
    $ annotate --file ./project-notes.json
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from annotate.core.errors import AnnotateError, StorageCorrupt
from annotate.core.settings import get_logger
from annotate.core.store import AnnotationStore
from annotate.ui.controller import InteractionController
from annotate.ui.terminal import RichTerminal

# Ensure env vars (like ANNOTATE_FILE) from .env are visible before any logic runs
load_dotenv()

app = typer.Typer(
    help="annotate: jot down short notes and browse them later.",
    rich_markup_mode="markdown",
    add_completion=False,
)
console = Console()
logger = get_logger("annotate.cli")


def _report(exc: AnnotateError, verbose: bool) -> None:
    """Helper: print a store failure in a consistent style."""
    title = "Storage Error" if isinstance(exc, StorageCorrupt) else "Save Error"
    console.print(f"[bold red]❌ {title}:[/bold red] {escape(str(exc))}", soft_wrap=True)
    if isinstance(exc, StorageCorrupt):
        console.print("[dim]The file was left untouched; fix or move it and retry.[/dim]")
    if verbose:
        traceback.print_exc()


# Fixed (MyPy): Untyped decorator workaround
@app.command(name="annotate")  # type: ignore[misc]
def main(
    text: Annotated[
        list[str] | None,
        typer.Argument(
            help="Words of the annotation to record. Omit to open the interactive list.",
            show_default=False,
        ),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            dir_okay=False,
            help="Annotations file to use instead of ANNOTATE_FILE / ~/.annotations.json.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show full error tracebacks for debugging.",
        ),
    ] = False,
) -> None:
    """
    annotate: record an annotation, or browse them interactively.
    """
    store = AnnotationStore(file)
    content = " ".join(text or [])

    try:
        collection = store.load()

        if content.strip():
            note = store.add(collection, content)
            store.save(collection)
            logger.info("Recorded annotation #%d in %s", note.id, store.path)
            console.print(f"[bold green]✅ Annotated[/bold green] [dim]#{note.id}[/dim]")
            return

        InteractionController(store, RichTerminal(console)).run(collection)

    except AnnotateError as e:
        _report(e, verbose)
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
