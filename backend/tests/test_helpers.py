import datetime as dt

from app.models.enums import BillingPeriod
from app.utils.helpers import add_months, period_end


def test_add_months_clamps_to_month_end():
    value = dt.datetime(2026, 1, 31, 9, 30)
    assert add_months(value, 1) == dt.datetime(2026, 2, 28, 9, 30)
    assert add_months(dt.datetime(2028, 1, 31), 1) == dt.datetime(2028, 2, 29)


def test_add_months_rolls_over_year():
    assert add_months(dt.datetime(2026, 12, 15), 1) == dt.datetime(2027, 1, 15)


def test_period_end_yearly_from_leap_day():
    start = dt.datetime(2028, 2, 29, tzinfo=dt.timezone.utc)
    assert period_end(start, BillingPeriod.YEARLY) == dt.datetime(2029, 2, 28, tzinfo=dt.timezone.utc)


def test_period_end_monthly_keeps_time_and_zone():
    start = dt.datetime(2026, 4, 10, 8, 0, tzinfo=dt.timezone.utc)
    assert period_end(start, BillingPeriod.MONTHLY) == dt.datetime(2026, 5, 10, 8, 0, tzinfo=dt.timezone.utc)
