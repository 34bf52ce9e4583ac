"""Duration parsing and date formatting utilities for time entries."""

import math
import re
from datetime import date, datetime
from typing import Optional

INVALID_FORMAT_MESSAGE = "invalid format, use decimal (e.g. 1.5) or time (e.g. 1:30)"
NOT_POSITIVE_MESSAGE = "hours must be greater than 0"

ISO_DATE_FORMAT = "%Y-%m-%d"

# Plain decimal only: no exponent, underscore, inf or nan
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")

GERMAN_DAY_NAMES = (
    "Montag",
    "Dienstag",
    "Mittwoch",
    "Donnerstag",
    "Freitag",
    "Samstag",
    "Sonntag",
)


class DurationError(ValueError):
    """Raised when a duration string cannot be turned into hours."""


def _to_float(value: str) -> Optional[float]:
    if not DECIMAL_PATTERN.fullmatch(value):
        return None
    number = float(value)
    # Overlong digit strings overflow to inf
    return number if math.isfinite(number) else None


def parse_duration(value: str) -> float:
    """
    Parse a duration string into hours.

    Supports formats:
    - Decimal: "1.5" -> 1.5 hours
    - Time: "1:30" -> 1.5 hours (minutes must be 0-59)

    A decimal that parses but is not positive is rejected right away, it is
    not retried as time notation.

    Args:
        value: Duration string as typed by the user

    Returns:
        Number of hours, always greater than 0

    Raises:
        DurationError: If the value is not positive or has any other shape
    """
    value = value.strip()

    hours = _to_float(value)
    if hours is not None:
        if hours > 0:
            return hours
        raise DurationError(NOT_POSITIVE_MESSAGE)

    parts = value.split(":")
    if len(parts) != 2:
        raise DurationError(INVALID_FORMAT_MESSAGE)

    whole_hours = _to_float(parts[0])
    minutes = _to_float(parts[1])
    if whole_hours is None or minutes is None:
        raise DurationError(INVALID_FORMAT_MESSAGE)
    if not 0 <= minutes < 60:
        raise DurationError(INVALID_FORMAT_MESSAGE)

    total = whole_hours + minutes / 60
    if total <= 0:
        raise DurationError(NOT_POSITIVE_MESSAGE)
    return total


def format_hours(hours: float) -> str:
    """Format hours with two decimals, e.g. 1.5 -> "1.50"."""
    return f"{hours:.2f}"


def format_entry_date(value: str) -> str:
    """
    Format an ISO date for the entries table header.

    Returns German weekday and day-first date, e.g. "2024-01-03" ->
    "Mittwoch, 03.01.2024". Values that are not ISO dates are returned as-is.
    """
    try:
        parsed = datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        return value
    return f"{GERMAN_DAY_NAMES[parsed.weekday()]}, {parsed.strftime('%d.%m.%Y')}"


def today_iso(today: Optional[date] = None) -> str:
    """Today's date as YYYY-MM-DD."""
    return (today or date.today()).strftime(ISO_DATE_FORMAT)
