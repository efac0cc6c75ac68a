"""Core datatypes shared across reportlint modules.

Responsibilities:
- Represent immutable records produced by the text linters.
- Keep per-document counters as values that callers sum explicitly.

Key types:
- `ChangeRecord`, `CitationCounters`, `CitationReport`, `HeadingCounters`,
  `HeadingReport`, `AttributeFinding`, `FileLintResult`, and `LintRunSummary`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Protocol


CHANGE_UNESCAPE_FIX = "unescape_fix"
CHANGE_MERGE = "merge"
CHANGE_FOOTNOTE_ADJACENCY = "footnote_adjacency"
CHANGE_REMOVE_BOLD = "remove_bold"
CHANGE_REMOVE_NUMBER = "remove_number"


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One applied fix or flagged issue inside a document.

    Attributes:
        kind: Change kind identifier (`unescape_fix`, `merge`, `footnote_adjacency`,
            `remove_bold`, or `remove_number`).
        original: Source text the change was made from, truncated for flags.
            Every merge record in a chain starts at the first group of the run.
        replacement: Replacement text, or `None` for read-only flags.
        line_number: 1-based line number of the match start.
    """

    kind: str
    original: str
    replacement: str | None
    line_number: int

    @property
    def is_flag(self) -> bool:
        """Return whether this record is a read-only flag rather than a fix."""

        return self.replacement is None


class LintCounters(Protocol):
    """Protocol for additive per-document counter values."""

    @property
    def files_changed(self) -> int:
        """Return the number of documents written back."""

    @property
    def fixable(self) -> int:
        """Return the number of automatic fixes represented by these counters."""

    def __add__(self, other: "LintCounters") -> "LintCounters":
        """Return the element-wise sum of two counter values."""

    def with_file_changed(self) -> "LintCounters":
        """Return a copy with one more changed file."""


@dataclass(frozen=True, slots=True)
class CitationCounters:
    """Citation normalizer counters for one document or a whole run."""

    escapes_fixed: int = 0
    citations_merged: int = 0
    manual_flags: int = 0
    files_changed: int = 0

    @property
    def fixable(self) -> int:
        """Return the number of automatic citation fixes."""

        return self.escapes_fixed + self.citations_merged

    def __add__(self, other: CitationCounters) -> CitationCounters:
        if not isinstance(other, CitationCounters):
            return NotImplemented
        return CitationCounters(
            escapes_fixed=self.escapes_fixed + other.escapes_fixed,
            citations_merged=self.citations_merged + other.citations_merged,
            manual_flags=self.manual_flags + other.manual_flags,
            files_changed=self.files_changed + other.files_changed,
        )

    def with_file_changed(self) -> CitationCounters:
        """Return a copy with `files_changed` incremented by one."""

        return replace(self, files_changed=self.files_changed + 1)


@dataclass(frozen=True, slots=True)
class HeadingCounters:
    """Heading linter counters for one document or a whole run."""

    bold_removed: int = 0
    numbers_removed: int = 0
    files_changed: int = 0

    @property
    def fixable(self) -> int:
        """Return the number of automatic heading fixes."""

        return self.bold_removed + self.numbers_removed

    def __add__(self, other: HeadingCounters) -> HeadingCounters:
        if not isinstance(other, HeadingCounters):
            return NotImplemented
        return HeadingCounters(
            bold_removed=self.bold_removed + other.bold_removed,
            numbers_removed=self.numbers_removed + other.numbers_removed,
            files_changed=self.files_changed + other.files_changed,
        )

    def with_file_changed(self) -> HeadingCounters:
        """Return a copy with `files_changed` incremented by one."""

        return replace(self, files_changed=self.files_changed + 1)


@dataclass(frozen=True, slots=True)
class CitationReport:
    """Output of one citation normalization call.

    Attributes:
        text: Rewritten document text.
        records: Ordered change and flag records.
        counters: Counters delta for this document (`files_changed` is always 0).
    """

    text: str
    records: tuple[ChangeRecord, ...]
    counters: CitationCounters


@dataclass(frozen=True, slots=True)
class HeadingReport:
    """Output of one heading lint call."""

    text: str
    records: tuple[ChangeRecord, ...]
    counters: HeadingCounters


@dataclass(frozen=True, slots=True)
class AttributeFinding:
    """One classified div/span/image attribute occurrence.

    Attributes:
        element_type: Element type label reported by the audit filter.
        attrs: Raw attribute string, e.g. `{#fig-map .mark}`.
        content: Short text excerpt of the element.
        element_id: Identifier extracted from `attrs`, or empty string.
        category: One of `ALT_FAIL`, `MARK`, `STYLE`, `REF`, or `OTHER`.
    """

    element_type: str
    attrs: str
    content: str
    element_id: str
    category: str


@dataclass(frozen=True, slots=True)
class FileLintResult:
    """Per-file outcome of a lint run."""

    path: Path
    display_path: str
    records: tuple[ChangeRecord, ...]
    counters: LintCounters
    written: bool = False


@dataclass(frozen=True, slots=True)
class LintRunSummary:
    """Aggregated result of one lint command over a document corpus.

    Attributes:
        command: Command name that produced the summary.
        apply_changes: Whether files were written back.
        files_scanned: Number of documents read.
        counters: Counters summed across all documents.
        results: Per-file results for documents with at least one record.
    """

    command: str
    apply_changes: bool
    files_scanned: int
    counters: LintCounters
    results: tuple[FileLintResult, ...] = field(default_factory=tuple)
