"""Shared parsing helpers for config value normalization."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return `value` as a stripped string, or `None` when blank."""

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a boolean token case-insensitively, returning `None` when invalid."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def normalize_extension(value: object) -> str | None:
    """Normalize a file extension token to lowercase with a leading dot.

    Args:
        value: Raw token such as `qmd`, `.QMD`, or ` .md `.

    Returns:
        Normalized extension, or `None` for blank tokens.
    """

    token = normalize_optional_string(value)
    if token is None:
        return None
    token = token.lower()
    return token if token.startswith(".") else f".{token}"


def parse_extension_list(value: object) -> tuple[str, ...]:
    """Parse a comma-separated string or a sequence into unique extensions."""

    if isinstance(value, (list, tuple)):
        raw_items = list(value)
    else:
        text = normalize_optional_string(value)
        raw_items = text.split(",") if text is not None else []

    extensions: list[str] = []
    for item in raw_items:
        extension = normalize_extension(item)
        if extension is not None and extension not in extensions:
            extensions.append(extension)
    return tuple(extensions)
