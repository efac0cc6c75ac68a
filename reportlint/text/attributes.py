"""Div/span attribute audit classification.

Responsibilities:
- Parse `tag|type|attrs|content` records emitted by the attribute audit filter.
- Classify each record with ordered first-match-wins rules.
- Group findings into display buckets in a stable order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import re

from ..models.datatypes import AttributeFinding

CATEGORY_ALT_FAIL = "ALT_FAIL"
CATEGORY_MARK = "MARK"
CATEGORY_STYLE = "STYLE"
CATEGORY_REF = "REF"
CATEGORY_OTHER = "OTHER"

_ID_RE = re.compile(r"#([\w-]+)")

_Predicate = Callable[[str, str, str], bool]


def _contains_any(attrs: str, needles: tuple[str, ...]) -> bool:
    return any(needle in attrs for needle in needles)


CLASSIFICATION_RULES: tuple[tuple[_Predicate, str], ...] = (
    (lambda attrs, element_type, _id: element_type == "Image (No Alt)", CATEGORY_ALT_FAIL),
    (
        lambda attrs, element_type, _id: ".mark" in attrs or element_type == "Text (Raw)",
        CATEGORY_MARK,
    ),
    (
        lambda attrs, _type, _id: _contains_any(
            attrs, ("comment", "annotation", "background-color")
        ),
        CATEGORY_MARK,
    ),
    (
        lambda attrs, _type, _id: _contains_any(
            attrs, (".underline", "style=", "width=", "color")
        ),
        CATEGORY_STYLE,
    ),
    (
        lambda _attrs, _type, element_id: element_id.startswith(("tbl-", "fig-")),
        CATEGORY_REF,
    ),
)

BUCKET_ORDER: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Highlights, Comments & Missing Alt", (CATEGORY_ALT_FAIL, CATEGORY_MARK)),
    ("Styling (Underlines, Widths)", (CATEGORY_STYLE,)),
    ("Figures & Tables", (CATEGORY_REF,)),
    ("Structure & Other", (CATEGORY_OTHER,)),
)


def classify(attrs: str, element_type: str, element_id: str) -> str:
    """Return the category of the first matching rule, or `OTHER`."""

    lowered = attrs.lower()
    for predicate, category in CLASSIFICATION_RULES:
        if predicate(lowered, element_type, element_id):
            return category
    return CATEGORY_OTHER


def extract_element_id(attrs: str) -> str:
    """Extract `my-id` from an attribute string like `{#my-id .class}`."""

    match = _ID_RE.search(attrs)
    return match.group(1) if match else ""


def parse_audit_line(line: str) -> AttributeFinding | None:
    """Parse one filter log line, returning `None` for unrelated lines."""

    parts = line.split("|")
    if len(parts) < 4:
        return None
    _, element_type, attrs, content = parts[:4]
    element_id = extract_element_id(attrs)
    return AttributeFinding(
        element_type=element_type,
        attrs=attrs,
        content=content,
        element_id=element_id,
        category=classify(attrs, element_type, element_id),
    )


def audit_attribute_log(lines: Iterable[str]) -> list[AttributeFinding]:
    """Classify every well-formed record in a filter log."""

    findings: list[AttributeFinding] = []
    for line in lines:
        finding = parse_audit_line(line.rstrip("\r\n"))
        if finding is not None:
            findings.append(finding)
    return findings


def bucket_findings(
    findings: Iterable[AttributeFinding],
) -> list[tuple[str, list[AttributeFinding]]]:
    """Group findings into titled buckets, skipping empty ones."""

    by_category: dict[str, list[AttributeFinding]] = {}
    for finding in findings:
        by_category.setdefault(finding.category, []).append(finding)

    buckets: list[tuple[str, list[AttributeFinding]]] = []
    for title, categories in BUCKET_ORDER:
        items = [item for category in categories for item in by_category.get(category, [])]
        if items:
            buckets.append((title, items))
    return buckets
