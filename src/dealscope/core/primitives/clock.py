# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Date helpers for time-relative calculations.

Every function that measures time remaining takes an explicit ``now``. The
wall clock is only read by ``resolve_now`` at public entry points when the
caller did not supply one.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pandas as pd
from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

AVERAGE_MONTH_DAYS = 30.44
SIMPLE_MONTH_DAYS = 30.0
AVERAGE_YEAR_DAYS = 365.25


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` unchanged, or the current time when it is ``None``."""
    if now is None:
        return datetime.now()
    return to_datetime(now, default=datetime.now())


def to_datetime(value: Any, default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse ``value`` into a naive ``datetime``.

    Accepts datetimes, dates, pandas Timestamps, ISO-like strings and epoch
    milliseconds. Returns ``default`` when the value is absent or unparsable.
    """
    if value is None or value == "":
        return default
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return default
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(float(value) / 1000.0)
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Ignoring out-of-range timestamp {value!r}")
            return default
    if isinstance(value, str):
        try:
            return date_parser.parse(value).replace(tzinfo=None)
        except (ValueError, OverflowError):
            logger.warning(f"Could not parse date {value!r}; using default")
            return default
    return default


def add_days(moment: datetime, days: float) -> datetime:
    return moment + timedelta(days=days)


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 86400.0


def months_between(
    start: datetime, end: datetime, month_days: float = AVERAGE_MONTH_DAYS
) -> float:
    """Fractional months from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return days_between(start, end) / month_days


def months_remaining(
    expiration: datetime, now: datetime, month_days: float = AVERAGE_MONTH_DAYS
) -> float:
    """Months until ``expiration``, floored at zero."""
    return max(0.0, months_between(now, expiration, month_days))


def years_between(
    start: datetime, end: datetime, year_days: float = AVERAGE_YEAR_DAYS
) -> float:
    return days_between(start, end) / year_days


__all__ = [
    "AVERAGE_MONTH_DAYS",
    "AVERAGE_YEAR_DAYS",
    "SIMPLE_MONTH_DAYS",
    "add_days",
    "days_between",
    "months_between",
    "months_remaining",
    "resolve_now",
    "to_datetime",
    "years_between",
]
