"""Calendar-date helpers shared by the sheet parser and membership checks.

Everything past the import boundary works with plain ``datetime.date``
values. Time-of-day and timezone must never leak into a membership or
birth-date comparison, so they are stripped here, once.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

# Formats seen in the membership sheet and on PDGA event data
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
)


def to_calendar_date(value: date | datetime) -> date:
    """Reduce a date or datetime to its calendar date.

    Aware datetimes are converted to UTC first, so the same instant always
    lands on the same day regardless of the server's local timezone.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a date string in any of the known formats.

    Returns None for empty input. Raises ValueError if the text is not
    empty but matches none of the formats.
    """
    if text is None:
        return None
    cleaned = " ".join(text.split())
    if not cleaned:
        return None

    try:
        return to_calendar_date(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"Unrecognised date: {text!r}")
