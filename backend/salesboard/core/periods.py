# salesboard/core/periods.py
from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from decimal import Decimal

from salesboard.core.money import MONEY_ZERO, to_decimal, to_money

MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
MONTH_PATTERN = MONTH_RE.pattern


def parse_month(month: str) -> tuple[int, int]:
    """
    "2024-07" -> (2024, 7). Raises ValueError for anything else.
    """
    m = MONTH_RE.match((month or "").strip())
    if not m:
        raise ValueError(f"Invalid month identifier {month!r}; expected YYYY-MM.")
    return int(m.group(1)), int(m.group(2))


def month_of(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_bounds(month: str) -> tuple[date, date]:
    year, mon = parse_month(month)
    last = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last)


def is_in_month(day: date, month: str) -> bool:
    first, last = month_bounds(month)
    return first <= day <= last


def remaining_business_days(month: str, today: date) -> int:
    """
    Weekdays (Mon-Fri) left in `month`, counting today.

      - month before today's month: 0
      - today's month: today .. last day, inclusive
      - future month: 1st .. last day, inclusive
    """
    year, mon = parse_month(month)
    if (year, mon) < (today.year, today.month):
        return 0

    first, last = month_bounds(month)
    start = today if (year, mon) == (today.year, today.month) else first

    count = 0
    day = start
    while day <= last:
        if day.weekday() < 5:
            count += 1
        day += timedelta(days=1)
    return count


def required_daily_average(store_goal, total_store, remaining_days: int) -> Decimal:
    """
    Store sales needed per remaining business day to reach the goal.
    Zero once the goal is reached or no business days are left.
    """
    goal = to_decimal(store_goal)
    store = to_decimal(total_store)
    if goal > store and remaining_days > 0:
        return to_money((goal - store) / remaining_days)
    return MONEY_ZERO


def actual_daily_average(total_store, days_with_sales: int) -> Decimal:
    if days_with_sales <= 0:
        return MONEY_ZERO
    return to_money(to_decimal(total_store) / days_with_sales)
