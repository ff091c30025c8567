"""
dates.py — Period keys for ticket analytics
===========================================
Period keys are "Y-M-D" strings built with a deliberately simple calendar:
every year has 365 days and February always has 28. Keys produced here are
compared against keys stored by existing dashboards, so the arithmetic must
stay exactly as it is even though it drifts from the real calendar.

Dashboards roll daily keys up into weeks (starting on Sunday) and months
with the same calendar, see rollup_key.
"""

from ticket_portal.schema import Granularity

NANOS_PER_DAY = 86_400_000_000_000

MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def period_key(timestamp_ns: int) -> str:
    """Format a nanosecond timestamp as an unpadded "Y-M-D" key."""
    days = timestamp_ns // NANOS_PER_DAY
    year = 1970 + days // 365
    remaining = days % 365

    month = 1
    for length in MONTH_LENGTHS:
        if remaining < length:
            break
        remaining -= length
        month += 1

    return f"{year}-{month}-{remaining + 1}"


def period_sort_key(key: str) -> tuple[int, int, int]:
    """Turn a period key back into (year, month, day) for chronological sorting."""
    year, month, day = key.split("-")
    return int(year), int(month), int(day)


def day_number(key: str) -> int:
    """Days since 1970-1-1 in the simplified calendar; inverse of period_key."""
    year, month, day = period_sort_key(key)
    return (year - 1970) * 365 + sum(MONTH_LENGTHS[:month - 1]) + day - 1


def week_key(key: str) -> str:
    """Key of the Sunday that starts the week containing ``key``."""
    days = day_number(key)
    # Day 0 (1970-1-1) was a Thursday.
    return period_key((days - (days + 4) % 7) * NANOS_PER_DAY)


def month_key(key: str) -> str:
    year, month, _ = period_sort_key(key)
    return f"{year}-{month}-1"


def rollup_key(key: str, granularity: Granularity) -> str:
    """Map a daily key to the key of its day, week or month bucket."""
    granularity = Granularity(granularity)
    if granularity is Granularity.WEEK:
        return week_key(key)
    if granularity is Granularity.MONTH:
        return month_key(key)
    return key
