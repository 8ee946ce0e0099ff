"""Miscellaneous helper functions."""

from __future__ import annotations

import calendar
import datetime as dt

from app.models.enums import BillingPeriod


def utcnow() -> dt.datetime:
    """Timezone-aware current time in UTC."""
    return dt.datetime.now(dt.timezone.utc)


def add_months(value: dt.datetime, months: int) -> dt.datetime:
    """Add calendar months to ``value``.

    The day is clamped to the last day of the target month, so January 31st
    plus one month is the last day of February.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def period_end(start: dt.datetime, period: BillingPeriod) -> dt.datetime:
    """Return the end of a billing period starting at ``start``."""
    if period == BillingPeriod.YEARLY:
        return add_months(start, 12)
    return add_months(start, 1)
