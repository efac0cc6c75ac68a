"""Report corpus discovery and document storage.

Responsibilities:
- Find report documents under a root directory in deterministic order.
- Load and save document text verbatim, without newline translation.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def discover_documents(root: Path, extensions: Iterable[str] = (".qmd",)) -> list[Path]:
    """Return sorted document paths under `root` matching one of `extensions`.

    Raises:
        FileNotFoundError: If `root` does not exist or is not a directory.
    """

    if not root.is_dir():
        raise FileNotFoundError(f"Reports directory not found: `{root}`.")
    suffixes = {extension.lower() for extension in extensions}
    return sorted(
        path
        for path in root.rglob("*")
        if path.is_file() and path.suffix.lower() in suffixes
    )


class DocumentStore:
    """Filesystem-backed document store rooted at the project directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with the directory used for display paths."""

        self.root = root

    def display_path(self, path: Path) -> str:
        """Return `path` relative to the store root when possible."""

        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def load_text(self, path: Path) -> str:
        """Load UTF-8 document text, keeping line endings untouched."""

        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()

    def save_text(self, path: Path, content: str) -> Path:
        """Replace the document content verbatim and return its path."""

        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        return path
