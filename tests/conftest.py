"""Shared pytest fixtures for the reportlint test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_corpus(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a helper that writes `reports/<name>` documents and returns the reports dir."""

    reports_dir = tmp_path / "reports"

    def _write(documents: dict[str, str]) -> Path:
        for relative_name, content in documents.items():
            path = reports_dir / relative_name
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        reports_dir.mkdir(parents=True, exist_ok=True)
        return reports_dir

    return _write


def read_verbatim(path: Path) -> str:
    """Read a file without newline translation."""

    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


@pytest.fixture
def read_document() -> Callable[[Path], str]:
    """Provide a verbatim file reader for assertions on written documents."""

    return read_verbatim
