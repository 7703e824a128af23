"""Text normalization helpers shared by the import pipeline and lookups."""

import re
from typing import Any, Optional

_WHITESPACE = re.compile(r"\s+")

# Literal placeholders some exporters write into empty reference cells
NULL_MARKERS = frozenset({"null", "undefined"})


def normalize_header(header: Any) -> str:
    """Lowercase, trim and collapse inner whitespace of a column header.

    >>> normalize_header("Business  Line ")
    'business line'
    """
    if header is None:
        return ""
    return _WHITESPACE.sub(" ", str(header).strip().lower())


def is_blank(value: Any) -> bool:
    """True for None and for values that are empty after trimming."""
    return value is None or str(value).strip() == ""


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text ('' for None)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def lookup_key(value: Any) -> Optional[str]:
    """Key used for case-insensitive name lookups.

    Returns None when the value is blank or a literal null marker, meaning
    no lookup should be attempted.
    """
    key = cell_text(value).lower()
    if not key or key in NULL_MARKERS:
        return None
    return key
