from __future__ import annotations

import re
from datetime import date, datetime

_REDUCED_PRECISION = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{2}))?$")


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse an ISO 8601 date or date-time into a date. Returns None for blank or invalid input."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # Accept a trailing 'Z' for UTC the way JavaScript clients send it
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    # Reduced precision: YYYY and YYYY-MM name the first day of the period
    match = _REDUCED_PRECISION.match(text)
    if match is None:
        return None
    year, month = match.group("year", "month")
    try:
        return date(int(year), int(month or 1), 1)
    except ValueError:
        return None


def to_iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def format_display(value: date | None) -> str:
    """Human readable date, e.g. 'June 6, 1973'. Empty string when missing."""
    if not value:
        return ""
    return f"{value:%B} {value.day}, {value.year}"
