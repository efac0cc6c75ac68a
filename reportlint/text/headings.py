"""Heading cleanup rules for report Markdown.

Responsibilities:
- Remove bold markers from ATX headings (`## **Title**` -> `## Title`).
- Remove hardcoded section numbers (`## 1.2. Title` -> `## Title`),
  keeping leading years such as `## 1999 Review`.
"""

from __future__ import annotations

import re

from ..models.datatypes import (
    CHANGE_REMOVE_BOLD,
    CHANGE_REMOVE_NUMBER,
    ChangeRecord,
    HeadingCounters,
    HeadingReport,
)

_HEADING_LINE_RE = re.compile(r"^(#+\s+)(.*)$")
_NUMBERED_HEADING_RE = re.compile(r"^(#+\s+)(\d+(?:\.\d+)*\.?)\s+(.*)$")
_YEAR_RE = re.compile(r"^(19|20)\d{2}\.?$")


def strip_heading_bold(line: str) -> str | None:
    """Return the heading line without `**`, or `None` when no rule applies."""

    if not _HEADING_LINE_RE.match(line) or "**" not in line:
        return None
    return line.replace("**", "")


def strip_heading_number(line: str) -> str | None:
    """Return the heading line without its section number, or `None`."""

    match = _NUMBERED_HEADING_RE.match(line)
    if match is None:
        return None
    prefix, number, title = match.groups()
    if _YEAR_RE.match(number):
        return None
    return f"{prefix}{title}"


class HeadingLinter:
    """Apply heading rules line by line, bold removal first."""

    command_name = "headings"

    def lint(self, text: str) -> HeadingReport:
        """Return cleaned text plus one record per applied rule."""

        records: list[ChangeRecord] = []
        bold_removed = 0
        numbers_removed = 0
        new_lines: list[str] = []

        for line_number, line in enumerate(text.split("\n"), start=1):
            unbolded = strip_heading_bold(line)
            if unbolded is not None:
                records.append(
                    ChangeRecord(CHANGE_REMOVE_BOLD, line, unbolded, line_number)
                )
                bold_removed += 1
                line = unbolded

            unnumbered = strip_heading_number(line)
            if unnumbered is not None:
                records.append(
                    ChangeRecord(CHANGE_REMOVE_NUMBER, line, unnumbered, line_number)
                )
                numbers_removed += 1
                line = unnumbered

            new_lines.append(line)

        return HeadingReport(
            text="\n".join(new_lines),
            records=tuple(records),
            counters=HeadingCounters(
                bold_removed=bold_removed,
                numbers_removed=numbers_removed,
            ),
        )
