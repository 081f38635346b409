"""Shared date utilities used across the scheduling modules."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from src.config import WEEKDAY_NAMES

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> date:
    """Parse a canonical YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a canonical date.
    """
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Render a date as a canonical YYYY-MM-DD string."""
    return value.strftime(DATE_FORMAT)


def is_canonical_date(value: str) -> bool:
    """Check that a string is exactly a zero-padded YYYY-MM-DD date."""
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return False
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def today_str(today: Optional[date] = None) -> str:
    """Canonical string for today, or for an injected reference day."""
    return format_date(today or date.today())


def shift_date(value: str, days: int) -> str:
    """Move a canonical date string by a number of days (negative = earlier).

    Examples:
        >>> shift_date("2026-10-19", 2)
        '2026-10-21'
        >>> shift_date("2026-10-01", -1)
        '2026-09-30'
    """
    return format_date(parse_date(value) + timedelta(days=days))


def next_weekday(name: str, today: Optional[date] = None) -> str:
    """Resolve a weekday name to its next occurrence strictly after today.

    When today already is that weekday the result is one week out.
    """
    today = today or date.today()
    target = WEEKDAY_NAMES.index(name.strip().lower())
    days_ahead = (target - today.weekday()) % 7 or 7
    return format_date(today + timedelta(days=days_ahead))


def short_date(value: str) -> str:
    """Human form used in confirmation messages, e.g. ``Oct 23``."""
    parsed = parse_date(value)
    return f"{parsed.strftime('%b')} {parsed.day}"


def is_weekday(value: date) -> bool:
    return value.weekday() < 5
