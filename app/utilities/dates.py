"""
Date-range helpers for reports.

Ranges are half-open: start <= occurred_at < end. Datetimes are compared as
naive UTC, which is how occurred_at is stored.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Tuple

from app.core.exceptions import ValidationError

REPORT_PERIODS = ("current-month", "last-month", "last-3-months", "current-year")


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def month_start(value: date) -> date:
    return date(value.year, value.month, 1)


def add_months(value: date, months: int) -> date:
    """Shift a first-of-month date by a whole number of months."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def at_midnight(value: date) -> datetime:
    return datetime.combine(value, time.min)


def resolve_period(period: str, reference: date) -> Tuple[datetime, datetime]:
    """Turn a named report period into a [start, end) datetime range around the reference date."""
    current = month_start(reference)
    if period == "current-month":
        start, end = current, add_months(current, 1)
    elif period == "last-month":
        start, end = add_months(current, -1), current
    elif period == "last-3-months":
        start, end = add_months(current, -2), add_months(current, 1)
    elif period == "current-year":
        start, end = date(reference.year, 1, 1), date(reference.year + 1, 1, 1)
    else:
        raise ValidationError(
            f"Unknown period {period!r}; expected one of: {', '.join(REPORT_PERIODS)}"
        )
    return at_midnight(start), at_midnight(end)


def resolve_range(
    start: Optional[datetime],
    end: Optional[datetime],
    period: Optional[str] = None,
    reference: Optional[date] = None,
) -> Tuple[datetime, datetime]:
    """
    Validate the range a report was asked for.
    Either a named period or both start and end must be given; there is no all-time default.
    """
    if period:
        if start is not None or end is not None:
            raise ValidationError("Give either period or start/end, not both")
        return resolve_period(period, reference or date.today())

    if start is None or end is None:
        raise ValidationError("A date range is required: pass start and end, or period")

    start, end = to_naive_utc(start), to_naive_utc(end)
    if end < start:
        raise ValidationError("end must not be before start")
    return start, end


def in_range(occurred_at: datetime, start: datetime, end: datetime) -> bool:
    return start <= to_naive_utc(occurred_at) < end
