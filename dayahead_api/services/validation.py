"""
Date and date range checks applied before any derived-view fetch.

The proxy relay does not call these: it forwards whatever it receives.
"""

from datetime import date
from typing import Union

from ..exceptions import InvalidDateRangeError
from ..models import RangeValidation

DateLike = Union[date, str]

FUTURE_DATE = "Please select a date that is today or earlier."
FUTURE_START = "Start date must be today or earlier."
FUTURE_END = "End date must be today or earlier."
END_BEFORE_START = "End date must be on or after the start date."


def parse_date(value: DateLike, field: str = "date") -> date:
    """Parse a YYYY-MM-DD string, raising InvalidDateRangeError on bad input."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidDateRangeError(f"Invalid {field} '{value}', expected YYYY-MM-DD")


def validate_date(day: DateLike, today: date) -> RangeValidation:
    """A single chart day must not lie in the future."""
    if parse_date(day) > today:
        return RangeValidation(ok=False, reason=FUTURE_DATE)
    return RangeValidation(ok=True)


def validate_range(start: DateLike, end: DateLike, today: date) -> RangeValidation:
    """
    Check a date range: ``start <= end`` and both on or before ``today``.

    Returns:
        RangeValidation: ``ok`` or the first rejection reason
    """
    start = parse_date(start, "start date")
    end = parse_date(end, "end date")

    if start > today:
        return RangeValidation(ok=False, reason=FUTURE_START)
    if end > today:
        return RangeValidation(ok=False, reason=FUTURE_END)
    if end < start:
        return RangeValidation(ok=False, reason=END_BEFORE_START)
    return RangeValidation(ok=True)


def ensure_valid(result: RangeValidation) -> None:
    """Raise InvalidDateRangeError for a rejected validation."""
    if not result.ok:
        raise InvalidDateRangeError(result.reason)
