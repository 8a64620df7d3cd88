# tracker/ingest/utils.py
"""
Field conversion utilities for uploaded CSV rows.
Hours, month tokens and productivity percentages arrive in several shapes;
these helpers turn them into the canonical values that get stored.
"""

import math
import re
from typing import Optional

# Canonical month abbreviations, in calendar order
MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# "25-Aug" style tokens exported by some time trackers
DAY_FIRST_MONTH_PATTERN = re.compile(r"^\d{2}-[A-Za-z]{3}$")

# Canonical "Aug-25" month token
MONTH_TOKEN_PATTERN = re.compile(r"^[A-Za-z]{3}-\d{2}$")


def parse_decimal(value: Optional[str]) -> Optional[float]:
    """
    Parse a decimal string, returning None when it is empty or not a finite number.

    Args:
        value: Raw string value

    Returns:
        Parsed float or None
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer id column; None when the value is not a whole number."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    number = parse_decimal(text)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _time_part(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def parse_productive_hours(value: Optional[str]) -> float:
    """
    Convert a productive-hours cell to decimal hours.

    Handles:
    - "H:M:S" time format (e.g. "114:39:00" -> 114.65)
    - "H:M" time format (seconds default to 0)
    - Plain decimals (e.g. "114.65")
    - Empty or unparseable values -> 0
    """
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0

    if ":" in text:
        parts = text.split(":")
        hours = _time_part(parts[0])
        minutes = _time_part(parts[1]) if len(parts) > 1 else 0
        seconds = _time_part(parts[2]) if len(parts) > 2 else 0
        return hours + (minutes / 60) + (seconds / 3600)

    number = parse_decimal(text)
    return number if number is not None else 0.0


def parse_total_hours(value: Optional[str]) -> float:
    """Parse the total hours column; unparseable values silently become 0."""
    number = parse_decimal(value)
    return number if number is not None else 0.0


def normalize_month(value: str) -> str:
    """
    Rewrite a day-first "DD-Mon" token to the canonical "Mon-DD" form.

    Any other shape is returned unchanged so the validator can flag it.
    """
    text = value.strip()
    if DAY_FIRST_MONTH_PATTERN.match(text):
        day, month_name = text.split("-")
        return f"{month_name}-{day}"
    return text


def is_month_token(value: str) -> bool:
    """Check a month token has the "Mmm-YY" shape."""
    return bool(MONTH_TOKEN_PATTERN.match(value or ""))


def parse_productivity(value: Optional[str]) -> Optional[float]:
    """
    Parse a productivity percentage.

    A trailing "%" is ignored. Values in (0, 1] are fractions and get scaled
    to percent; 0 and values above 1 are already percentages. An empty cell
    is 0. Returns None for a non-empty value that is not a number.
    """
    if value is None:
        return 0.0
    text = str(value).replace("%", "").strip()
    if not text:
        return 0.0

    number = parse_decimal(text)
    if number is None:
        return None
    if 0 < number <= 1:
        return number * 100
    return number


def month_sort_key(month: str) -> Optional[tuple]:
    """
    Build a (year, month_index) key for a canonical month token.

    Returns None when the token is not a recognizable "Mmm-YY" value.
    """
    if not is_month_token(month):
        return None
    abbreviation, year = month.split("-")
    abbreviation = abbreviation.capitalize()
    if abbreviation not in MONTH_ABBREVIATIONS:
        return None
    return int(year), MONTH_ABBREVIATIONS.index(abbreviation)
