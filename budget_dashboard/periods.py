"""Day counting for budget periods and consumption plans.

Both the budget timeline and every consumption plan timeline are measured
with :func:`compute_period_progress`, so the two always agree on what
"day 1" means.  Ranges are inclusive: a plan running from the 1st to the
30th of a month spans 30 days.

``now`` is always passed in by the caller.  Nothing here reads the clock.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

Moment = Union[date, datetime, str]

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class PeriodProgress:
    """Position of ``now`` inside an inclusive date range."""

    current_day: int
    remaining_days: int
    total_days: int


def coerce_moment(value: Any) -> Optional[Union[date, datetime]]:
    """Convert API date values to ``date``/``datetime``.

    ``date`` and naive ``datetime`` objects pass through unchanged.  Strings
    and pandas timestamps are parsed; timezone-aware values are converted
    to UTC and made naive.  Anything unparseable yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return pd.Timestamp(value).tz_convert("UTC").tz_localize(None).to_pydatetime()
        return value
    if isinstance(value, date):
        return value
    if isinstance(value, str) and not value.strip():
        return None

    try:
        stamp = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError):
        stamp = pd.NaT
    if not isinstance(stamp, pd.Timestamp) or pd.isna(stamp):
        logger.debug("Ignoring unparseable date value %r", value)
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp.to_pydatetime()


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def day_span(start: Moment, end: Moment) -> int:
    """Whole days from ``start`` to ``end``, rounded up.

    Partial days round up, so 09:00 on the 2nd is two days after midnight
    on the 1st.

    Raises:
        ValueError: If either value cannot be read as a date
    """
    start_value = coerce_moment(start)
    end_value = coerce_moment(end)
    if start_value is None or end_value is None:
        raise ValueError("day_span requires two valid dates")
    delta = _as_datetime(end_value) - _as_datetime(start_value)
    return math.ceil(delta / ONE_DAY)


def compute_period_progress(start: Moment, end: Moment, now: Moment) -> PeriodProgress:
    """Work out where ``now`` falls in the inclusive range ``start``..``end``.

    Args:
        start: First day of the range
        end: Last day of the range (inclusive)
        now: Reference moment supplied by the caller

    Returns:
        PeriodProgress with ``current_day`` (1 on the first day, 0 before
        the range), ``remaining_days`` (0 on and after the last day) and
        ``total_days``

    Note:
        ``end < start`` is not rejected; ``total_days`` simply comes out
        zero or negative.  Validating the range is the job of whoever edits
        the budget.

    Raises:
        ValueError: If any of the three values cannot be read as a date

    Example:
        >>> compute_period_progress(date(2024, 1, 1), date(2024, 1, 30), date(2024, 1, 10))
        PeriodProgress(current_day=10, remaining_days=20, total_days=30)
    """
    total_days = day_span(start, end) + 1
    current_day = max(day_span(start, now) + 1, 0)
    remaining_days = max(total_days - current_day, 0)
    return PeriodProgress(
        current_day=current_day,
        remaining_days=remaining_days,
        total_days=total_days,
    )
