"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import Tuple


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def month_start(value: date) -> date:
    """First day of the month containing value"""
    return value.replace(day=1)


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date with day clamped to [1, last day of month]"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(max(1, day), last_day))


def split_months(months: int) -> Tuple[int, int]:
    """Split a month count into (years, remaining months)"""
    return months // 12, months % 12


def months_until(from_date: date, until: date) -> int:
    """Whole calendar months from from_date's month to until's month (never negative)"""
    return max(0, (until.year - from_date.year) * 12 + (until.month - from_date.month))


def months_started_before(from_date: date, until: date) -> int:
    """Monthly periods beginning at from_date that start before until, a final partial period included"""
    if until <= from_date:
        return 0
    months = months_until(from_date, until)
    if until.day > from_date.day:
        months += 1
    return months
