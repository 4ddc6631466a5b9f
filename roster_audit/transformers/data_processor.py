"""Cell cleaning and text normalization for the roster audit system."""
import numbers
import re
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

WHITESPACE_PATTERN = re.compile(r"\s+")
LEADING_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
WORD_PATTERN = re.compile(r"\w+")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_text(value: Any) -> str:
    """
    Normalize a cell value for comparisons.

    Args:
        value: Any scalar cell value

    Returns:
        Upper-cased, whitespace-collapsed, trimmed string ("" for missing values)
    """
    if _is_missing(value):
        return ""
    return WHITESPACE_PATTERN.sub(" ", str(value).upper()).strip()


def cell_text(value: Any) -> str:
    """Trimmed display text of a cell; integral floats lose their ".0"."""
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def cell_at(row: Sequence[Any], index: Optional[int]) -> Any:
    """Value at a column index, or None for a missing column/short row."""
    if row is None or index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def to_number(value: Any) -> float:
    """
    Read a reported figure from a cell.

    Numbers pass through, text yields its leading numeric prefix, and
    anything else counts as 0.
    """
    if _is_missing(value) or isinstance(value, bool):
        return 0
    if isinstance(value, numbers.Number):
        number = float(value)
    else:
        match = LEADING_NUMBER_PATTERN.match(str(value).strip().replace(",", ""))
        if not match:
            return 0
        number = float(match.group(0))
    return int(number) if number.is_integer() else number


def matches_synonym(value: Any, synonyms: Iterable[str]) -> bool:
    """True when the normalized cell contains any normalized synonym."""
    norm = normalize_text(value)
    if not norm:
        return False
    return any(normalize_text(synonym) in norm for synonym in synonyms)


def mentions_keyword(text: Any, keywords: Iterable[str]) -> bool:
    """True when any word of the text starts with one of the keywords."""
    words = WORD_PATTERN.findall(normalize_text(text))
    normalized = [normalize_text(keyword) for keyword in keywords]
    return any(word.startswith(keyword) for word in words for keyword in normalized if keyword)
