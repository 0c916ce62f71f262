# tests/test_cli.py
"""
Tests for the annotate command-line interface (CLI).

Scope
-----
1.  **Dispatch**: words on the command line record an annotation; no words
    open the interactive list.
2.  **Store selection**: `--file` and `ANNOTATE_FILE` pick the file.
3.  **Error Handling**: corrupt or unwritable storage exits with code 1 and
    leaves the file alone.

We use `typer.testing.CliRunner` to invoke the app in-process; the
interactive session reads its answers from the runner's `input`.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from annotate.cli import app
from annotate.core.errors import StorageWriteFailure
from annotate.core.store import AnnotationStore


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    """Invoking --help should print usage instructions and exit 0."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "Usage: annotate" in result.output
    assert "record an annotation" in result.output
    assert "--file" in result.output


def test_words_record_one_annotation(runner: CliRunner, isolated_store_path: Path) -> None:
    """Positional words are joined with spaces and saved."""
    result = runner.invoke(app, ["Buy", "milk"])

    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert "Annotated" in result.output
    notes = AnnotationStore(isolated_store_path).load()
    assert [n.text for n in notes.annotations] == ["Buy milk"]


def test_file_option_overrides_env(runner: CliRunner, tmp_path: Path) -> None:
    """`--file` wins over ANNOTATE_FILE."""
    target = tmp_path / "elsewhere.json"
    result = runner.invoke(app, ["--file", str(target), "hello"])

    assert result.exit_code == 0, result.output
    assert [n.text for n in AnnotationStore(target).load().annotations] == ["hello"]


def test_no_words_opens_list_and_quits(runner: CliRunner) -> None:
    """Without words the interactive list is shown; `q` exits cleanly."""
    result = runner.invoke(app, [], input="q\n")

    assert result.exit_code == 0, result.output
    assert "You have not registered any annotation!" in result.output


def test_created_annotation_is_listed_as_just_now(runner: CliRunner) -> None:
    """Create "Buy milk", then open the list: one row, just now."""
    assert runner.invoke(app, ["Buy", "milk"]).exit_code == 0

    result = runner.invoke(app, [], input="q\n")

    assert result.exit_code == 0, result.output
    assert "Buy milk" in result.output
    assert "just now" in result.output


def test_interactive_create_and_delete(runner: CliRunner, isolated_store_path: Path) -> None:
    """Add "A" and "B" interactively, delete "A", and only "B" is left on disk."""
    script = "\n".join(["n", "A", "n", "B", "0", "d", "y", "q"]) + "\n"
    result = runner.invoke(app, [], input=script)

    assert result.exit_code == 0, result.output
    assert "Deleted annotation #0." in result.output
    notes = AnnotationStore(isolated_store_path).load()
    assert [n.text for n in notes.annotations] == ["B"]


def test_eof_quits_interactive_session(runner: CliRunner) -> None:
    """Closing stdin ends the session with success."""
    result = runner.invoke(app, [], input="")
    assert result.exit_code == 0, result.output


def test_corrupt_file_exits_1_and_is_untouched(
    runner: CliRunner, isolated_store_path: Path
) -> None:
    """A corrupt store is reported and never overwritten."""
    isolated_store_path.write_text("{broken", encoding="utf-8")

    for args in ([], ["new", "note"]):
        result = runner.invoke(app, args, input="q\n")
        assert result.exit_code == 1, f"Expected failure, got:\n{result.output}"
        assert "Storage Error" in result.output

    assert isolated_store_path.read_text(encoding="utf-8") == "{broken"


def test_write_failure_exits_1(runner: CliRunner, isolated_store_path: Path) -> None:
    """A failed save on the one-shot path exits with code 1."""
    with patch(
        "annotate.core.store.AnnotationStore.save",
        side_effect=StorageWriteFailure(isolated_store_path, "disk full"),
    ):
        result = runner.invoke(app, ["lost", "thought"])

    assert result.exit_code == 1
    assert "Save Error" in result.output
    assert "disk full" in result.output
    assert not isolated_store_path.exists()


def test_verbose_prints_traceback_on_corrupt_file(
    runner: CliRunner, isolated_store_path: Path
) -> None:
    """`-v` adds the full traceback to the error report."""
    isolated_store_path.write_text("{broken", encoding="utf-8")

    quiet = runner.invoke(app, ["some", "note"])
    loud = runner.invoke(app, ["-v", "some", "note"])

    assert quiet.exit_code == loud.exit_code == 1
    assert "Traceback" not in quiet.output
    assert "Traceback" in loud.output
    assert "StorageCorrupt" in loud.output
