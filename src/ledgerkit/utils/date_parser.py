"""Date parsing utilities for ledger filters."""

import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DAYS_AGO = re.compile(r"^(\d+)\s+days?\s+ago$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - "today", "yesterday"
    - "N days ago"
    - "this week|month|year", "last week|month|year" (first day of the period)

    Args:
        date_str: Date string
        today: Reference day for relative dates (defaults to the current UTC
            day, matching the naive UTC timestamps in the ledger)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or datetime.now(UTC).date()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    match = DAYS_AGO.match(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    if text.startswith(("this ", "last ")):
        which, _, period = text.partition(" ")
        start = _period_start(today, period)
        if start is not None:
            if which == "this":
                return start
            if period == "week":
                return start - timedelta(weeks=1)
            if period == "month":
                return start - relativedelta(months=1)
            return start - relativedelta(years=1)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _period_start(today: date, period: str) -> Optional[date]:
    if period == "week":
        return today - timedelta(days=today.weekday())
    if period == "month":
        return today.replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1)
    return None


def day_range(
    start_date: Optional[date], end_date: Optional[date]
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Convert inclusive calendar-day bounds into datetime bounds.

    Returns:
        (start, end) where start is midnight of start_date and end is midnight
        after end_date, suitable for ``start <= ts < end``

    Raises:
        ValueError: If start_date is after end_date
    """
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValueError(f"Start date {start_date} is after end date {end_date}")
    start = datetime.combine(start_date, time.min) if start_date is not None else None
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min)
        if end_date is not None
        else None
    )
    return start, end
