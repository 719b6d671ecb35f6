"""Calendar helpers for stepping across trading days."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, TypeVar

import pandas as pd

# Saturday and Sunday in ``date.weekday()`` numbering.
WEEKEND_DAYS: frozenset[int] = frozenset({5, 6})

_Dated = TypeVar("_Dated")


def is_weekend(value: date | datetime) -> bool:
    return _coerce_date(value).weekday() in WEEKEND_DAYS


def is_trading_day(value: date | datetime) -> bool:
    """Return ``True`` when ``value`` is a weekday.

    Exchange holidays are not modelled; the bar source only removes weekends.
    """

    return not is_weekend(value)


def next_trading_day(value: date | datetime) -> date:
    """Return the first weekday strictly after ``value``."""

    cursor = _coerce_date(value) + timedelta(days=1)
    while is_weekend(cursor):
        cursor = cursor + timedelta(days=1)
    return cursor


def filter_weekend_days(items: Iterable[_Dated]) -> list[_Dated]:
    """Drop records whose ``date`` attribute falls on a weekend."""

    return [item for item in items if not is_weekend(getattr(item, "date"))]


def _coerce_date(value: date | datetime | pd.Timestamp) -> date:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date-like value, got {type(value).__name__}")


__all__ = [
    "WEEKEND_DAYS",
    "filter_weekend_days",
    "is_trading_day",
    "is_weekend",
    "next_trading_day",
]
