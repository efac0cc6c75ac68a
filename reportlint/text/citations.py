"""Citation normalization passes for Pandoc-style Markdown citations.

Responsibilities:
- Remove converter escaping around bracketed citations (`\\[@key\\]`).
- Merge adjacent single-group citations into one semicolon-separated group.
- Flag citations placed directly before a footnote marker for manual review.

The three passes run in that order over one document buffer. The normalizer
performs no I/O and never raises for unusual bracket content.
"""

from __future__ import annotations

import re

from ..models.datatypes import (
    CHANGE_FOOTNOTE_ADJACENCY,
    CHANGE_MERGE,
    CHANGE_UNESCAPE_FIX,
    ChangeRecord,
    CitationCounters,
    CitationReport,
)

DEFAULT_DISPLAY_WIDTH = 60
_ELLIPSIS = "..."


def line_number_at(text: str, offset: int) -> int:
    """Return the 1-based line number of a character offset in `text`."""

    return text.count("\n", 0, offset) + 1


def truncate_display(value: str, width: int = DEFAULT_DISPLAY_WIDTH) -> str:
    """Shorten `value` to `width` characters, ending with an ellipsis when cut."""

    if len(value) <= width:
        return value
    return value[: max(0, width - len(_ELLIPSIS))] + _ELLIPSIS


class UnescapeCitations:
    """Strip the backslashes a converter puts in front of citation brackets."""

    _ESCAPED_RE = re.compile(r"\\\[(@[^\\\[\]]+)\\\]")

    def apply(self, text: str) -> tuple[str, list[ChangeRecord]]:
        """Rewrite every `\\[@...\\]` into `[@...]` in one global pass."""

        records: list[ChangeRecord] = []

        def _replace(match: re.Match[str]) -> str:
            replacement = f"[{match.group(1)}]"
            records.append(
                ChangeRecord(
                    kind=CHANGE_UNESCAPE_FIX,
                    original=match.group(0),
                    replacement=replacement,
                    line_number=line_number_at(text, match.start()),
                )
            )
            return replacement

        return self._ESCAPED_RE.sub(_replace, text), records


class MergeConsecutiveCitations:
    """Merge runs of adjacent single citation groups into one group.

    `[@a] [@b][@c]` becomes `[@a; @b; @c]`. A group that already holds a
    semicolon-separated citation is never merged with its neighbours, so
    `[@a; @b][@c]` is left as written.
    """

    _RUN_RE = re.compile(r"\[@[^\];]+\](?:\s*\[@[^\];]+\])+")
    _GROUP_RE = re.compile(r"\[(@[^\];]+)\]")

    def apply_once(self, text: str) -> tuple[str, list[ChangeRecord]]:
        """Run one full scan and collapse every adjacent run it finds."""

        records: list[ChangeRecord] = []

        def _replace(match: re.Match[str]) -> str:
            line_number = line_number_at(text, match.start())
            run = match.group(0)
            groups = list(self._GROUP_RE.finditer(run))
            merged = groups[0].group(1)
            for current in groups[1:]:
                merged = f"{merged}; {current.group(1)}"
                records.append(
                    ChangeRecord(
                        kind=CHANGE_MERGE,
                        original=run[: current.end()],
                        replacement=f"[{merged}]",
                        line_number=line_number,
                    )
                )
            return f"[{merged}]"

        return self._RUN_RE.sub(_replace, text), records

    def apply(self, text: str) -> tuple[str, list[ChangeRecord]]:
        """Repeat scans until one produces no merges.

        The loop is bounded by the buffer length since every productive scan
        removes at least two bracket characters.
        """

        records: list[ChangeRecord] = []
        current = text
        for _ in range(len(text) + 1):
            current, scan_records = self.apply_once(current)
            if not scan_records:
                break
            records.extend(scan_records)
        return current, records


class FlagFootnoteAdjacency:
    """Report citations that sit directly before a footnote marker."""

    _CITE_FOOTNOTE_RE = re.compile(r"\[@[^\]]+\]([.,;]?)\s*\[\^[^\]]+\]")

    def __init__(self, display_width: int = DEFAULT_DISPLAY_WIDTH) -> None:
        self.display_width = display_width

    def scan(self, text: str) -> list[ChangeRecord]:
        """Return one flag record per match; the buffer is never modified."""

        return [
            ChangeRecord(
                kind=CHANGE_FOOTNOTE_ADJACENCY,
                original=truncate_display(match.group(0), self.display_width),
                replacement=None,
                line_number=line_number_at(text, match.start()),
            )
            for match in self._CITE_FOOTNOTE_RE.finditer(text)
        ]


class CitationNormalizer:
    """Apply unescape, merge, and footnote-adjacency passes in order."""

    command_name = "citations"

    def __init__(self, display_width: int = DEFAULT_DISPLAY_WIDTH) -> None:
        self.unescape = UnescapeCitations()
        self.merge = MergeConsecutiveCitations()
        self.flag = FlagFootnoteAdjacency(display_width=display_width)

    def normalize(self, text: str) -> CitationReport:
        """Normalize citation markup and return text, records, and counters."""

        unescaped, unescape_records = self.unescape.apply(text)
        merged, merge_records = self.merge.apply(unescaped)
        flag_records = self.flag.scan(merged)

        counters = CitationCounters(
            escapes_fixed=len(unescape_records),
            citations_merged=len(merge_records),
            manual_flags=len(flag_records),
        )
        return CitationReport(
            text=merged,
            records=tuple(unescape_records + merge_records + flag_records),
            counters=counters,
        )

    def lint(self, text: str) -> CitationReport:
        """Alias of `normalize` used by the generic lint runner."""

        return self.normalize(text)
