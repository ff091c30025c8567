import pytest

from ticket_portal.dates import (
    NANOS_PER_DAY,
    day_number,
    month_key,
    period_key,
    period_sort_key,
    rollup_key,
    week_key,
)
from ticket_portal.schema import Granularity


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, "1970-1-1"),
        (30, "1970-1-31"),
        (31, "1970-2-1"),
        (58, "1970-2-28"),
        (59, "1970-3-1"),
        (364, "1970-12-31"),
        (365, "1971-1-1"),
        (20_000, "2024-10-18"),
    ],
)
def test_period_key_uses_fixed_365_day_calendar(days, expected):
    assert period_key(days * NANOS_PER_DAY) == expected


def test_period_key_truncates_to_the_day():
    assert period_key(NANOS_PER_DAY - 1) == "1970-1-1"
    assert period_key(5 * NANOS_PER_DAY + 12_345) == "1970-1-6"


def test_period_key_ignores_leap_years():
    # 1972 was a leap year; the portal calendar does not know that.
    assert period_key((3 * 365 + 59) * NANOS_PER_DAY) == "1973-3-1"


def test_period_sort_key_orders_chronologically_not_lexically():
    keys = ["2024-10-2", "2024-9-30", "2023-12-31", "2024-10-18"]
    assert sorted(keys, key=period_sort_key) == ["2023-12-31", "2024-9-30", "2024-10-2", "2024-10-18"]


@pytest.mark.parametrize("days", [0, 58, 59, 364, 365, 20_000])
def test_day_number_inverts_period_key(days):
    assert day_number(period_key(days * NANOS_PER_DAY)) == days


@pytest.mark.parametrize(
    "key, expected",
    [
        ("1970-1-1", "1969-12-28"),  # day 0 was a Thursday
        ("1970-1-4", "1970-1-4"),
        ("1970-1-10", "1970-1-4"),
        ("1970-1-11", "1970-1-11"),
        ("1971-1-1", "1970-12-27"),
        ("2024-10-18", "2024-10-13"),
        ("2024-10-19", "2024-10-13"),
        ("2024-10-20", "2024-10-20"),
        ("2024-11-1", "2024-10-27"),
    ],
)
def test_week_key_is_the_preceding_sunday(key, expected):
    assert week_key(key) == expected


def test_week_key_groups_seven_consecutive_days():
    keys = {week_key(period_key(days * NANOS_PER_DAY)) for days in range(3, 10)}
    assert keys == {"1970-1-4"}


def test_month_key_pins_day_to_one():
    assert month_key("2024-10-18") == "2024-10-1"
    assert month_key("1970-12-31") == "1970-12-1"


def test_rollup_key_by_granularity():
    assert rollup_key("2024-10-18", Granularity.DAY) == "2024-10-18"
    assert rollup_key("2024-10-18", Granularity.WEEK) == "2024-10-13"
    assert rollup_key("2024-10-18", Granularity.MONTH) == "2024-10-1"
    assert rollup_key("2024-10-18", "week") == "2024-10-13"
