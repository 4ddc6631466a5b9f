"""Month label helpers for the roster audit system."""
import re
from pathlib import Path
from typing import Mapping

from roster_audit.transformers.data_processor import normalize_text

YEAR_PATTERN = re.compile(r"\b(20\d{2})\b")


def extract_month_label(
    file_name: str,
    month_map: Mapping[str, int],
    default_year: str = "2025",
    unknown_month: str = "UNKNOWN",
) -> str:
    """
    Derive a month label such as "JANUARY 2025" from a roster file name.

    Longer month names are tried before abbreviations so that "MARCH" is
    preferred over "MAR".

    Args:
        file_name: Roster file name (path components are ignored)
        month_map: Month name to month number
        default_year: Year used when the name has no 20xx token
        unknown_month: Month part used when no month name matches

    Returns:
        "<MONTH> <YEAR>" label
    """
    norm = normalize_text(Path(file_name).name)

    year_match = YEAR_PATTERN.search(norm)
    year = year_match.group(1) if year_match else default_year

    month = unknown_month
    for name in sorted(month_map, key=len, reverse=True):
        if normalize_text(name) in norm:
            month = name
            break

    return f"{month} {year}"


def month_sort_value(label: str, month_map: Mapping[str, int], default_year: str = "2025") -> int:
    """Chronological sort key (year * 100 + month number) for a month label."""
    parts = label.split(" ")
    name = parts[0].upper()
    year = parts[1] if len(parts) > 1 and parts[1].isdigit() else default_year
    return int(year) * 100 + month_map.get(name, 0)


def month_year(label: str, default_year: str = "2025") -> str:
    """Year part of a month label."""
    parts = label.split(" ")
    return parts[1] if len(parts) > 1 and parts[1].isdigit() else default_year
