"""Text linting components.

This package provides the deterministic citation, heading, and attribute
rules applied to report Markdown documents.
"""

from .attributes import audit_attribute_log, bucket_findings, classify
from .citations import (
    CitationNormalizer,
    FlagFootnoteAdjacency,
    MergeConsecutiveCitations,
    UnescapeCitations,
)
from .headings import HeadingLinter

__all__ = [
    "CitationNormalizer",
    "UnescapeCitations",
    "MergeConsecutiveCitations",
    "FlagFootnoteAdjacency",
    "HeadingLinter",
    "audit_attribute_log",
    "bucket_findings",
    "classify",
]
