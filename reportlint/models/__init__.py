"""Shared typed data models for reportlint.

This package contains dataclasses exchanged between linters, the runner,
and CLI rendering to avoid cross-module coupling.
"""

from .datatypes import (
    CHANGE_FOOTNOTE_ADJACENCY,
    CHANGE_MERGE,
    CHANGE_REMOVE_BOLD,
    CHANGE_REMOVE_NUMBER,
    CHANGE_UNESCAPE_FIX,
    AttributeFinding,
    ChangeRecord,
    CitationCounters,
    CitationReport,
    FileLintResult,
    HeadingCounters,
    HeadingReport,
    LintRunSummary,
)

__all__ = [
    "CHANGE_FOOTNOTE_ADJACENCY",
    "CHANGE_MERGE",
    "CHANGE_REMOVE_BOLD",
    "CHANGE_REMOVE_NUMBER",
    "CHANGE_UNESCAPE_FIX",
    "AttributeFinding",
    "ChangeRecord",
    "CitationCounters",
    "CitationReport",
    "FileLintResult",
    "HeadingCounters",
    "HeadingReport",
    "LintRunSummary",
]
