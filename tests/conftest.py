"""Shared fixtures: every test gets its own annotations file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from annotate.core.settings import load_settings
from annotate.core.store import AnnotationStore


@pytest.fixture(autouse=True)  # type: ignore[misc]
def isolated_store_path(tmp_path: Path, monkeypatch: Any) -> Iterator[Path]:
    """Point ANNOTATE_FILE at a temp file so no test touches the real home dir."""
    path = tmp_path / "annotations.json"
    monkeypatch.setenv("ANNOTATE_FILE", str(path))
    load_settings.cache_clear()
    yield path
    load_settings.cache_clear()


@pytest.fixture  # type: ignore[misc]
def store(isolated_store_path: Path) -> AnnotationStore:
    """A store bound to the per-test annotations file."""
    return AnnotationStore(isolated_store_path)
