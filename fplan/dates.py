"""Date utilities for fplan.

Pure functions for calendar-date parsing, month periods and formatting.
"""

import calendar
import re
from datetime import date, datetime

import pandas as pd

from fplan.domain.models import Month

_ISO_DATE_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}(?:$|[T ])")


def parse_calendar_date(text: str | None) -> date | None:
    """Parse a calendar date from user text, discarding any time of day.

    Accepts ISO dates ("2025-09-05") and ISO datetimes ("2025-09-05T14:30:00").
    Partial dates ("2025", "Sep") and relative words ("now") are rejected.

    Args:
        text: Raw date text.

    Returns:
        The calendar date, or None if the text is blank or not a date.
    """
    if text is None or not text.strip():
        return None
    text = text.strip()
    if not _ISO_DATE_PREFIX.match(text):
        return None
    try:
        parsed = pd.to_datetime(text, format="ISO8601")
    except (ValueError, OverflowError, TypeError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_period(text: str | None) -> tuple[int, int]:
    """Parse a YYYY-MM month selector.

    Args:
        text: Month text such as "2025-09".

    Returns:
        Tuple of (year, month).

    Raises:
        ValueError: If the text is not YYYY-MM or the month is not 1-12.
    """
    if text is None:
        raise ValueError("Month is required")
    parts = text.strip().split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid month '{text}'. Expected YYYY-MM")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month number {month}. Expected 01-12")
    if not 1 <= year <= 9999:
        raise ValueError(f"Invalid year {year}")
    return year, month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Calculate the first and last calendar day of a month.

    Args:
        year: Four digit year.
        month: Month number 1-12.

    Returns:
        Tuple of (month_start, month_end), both inclusive.

    Raises:
        ValueError: If the month is not 1-12 or the year is out of range.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month number {month}. Expected 1-12")
    start = date(year, month, 1)
    _, last_day = calendar.monthrange(year, month)
    end = date(year, month, last_day)
    return start, end


def format_month_display(year: int, month: int) -> str:
    """Format a month for headings (e.g., "September 2025")."""
    return date(year, month, 1).strftime("%B %Y")


def current_month() -> Month:
    """Return the current month in YYYY-MM format."""
    return Month(datetime.now().strftime("%Y-%m"))
