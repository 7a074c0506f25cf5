"""
Age calculation for milestone eligibility.

The age feeds the template query bound, so bad input degrades to an age of
0 months instead of raising.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from typing import Any, Optional

from kidsteps.utils.datetime_utils import from_store_timestamp, now_utc

logger = logging.getLogger(__name__)


def coerce_birthdate(value: Any) -> Optional[date]:
    """
    Read a birthdate as stored in a child document.

    Accepts dates, datetimes, ISO strings and ``{"seconds", "nanoseconds"}``
    timestamp mappings. Returns None for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    timestamp = from_store_timestamp(value)
    return timestamp.date() if timestamp else None


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def age_in_months(birthdate: Any, now: date | datetime | None = None) -> int:
    """
    Whole calendar months elapsed between birthdate and now.

    A month counts once its day-of-month has been reached, or when ``now`` is
    the last day of a month shorter than the birth day (Jan 31 to Feb 28 is
    one month). Returns 0 for a missing, malformed or future birthdate.
    """
    born = coerce_birthdate(birthdate)
    if born is None:
        if birthdate is not None:
            logger.warning(f"Invalid birthdate {birthdate!r}, using age 0")
        return 0

    today = _as_date(now) if now is not None else now_utc().date()
    if born >= today:
        return 0

    months = (today.year - born.year) * 12 + (today.month - born.month)
    is_month_end = today.day == calendar.monthrange(today.year, today.month)[1]
    if today.day < born.day and not is_month_end:
        months -= 1
    return max(months, 0)
