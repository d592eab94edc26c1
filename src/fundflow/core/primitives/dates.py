# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Optional, Union

import pandas as pd

DAYS_PER_YEAR = 365.25

DateLike = Union[date, pd.Timestamp, str]


def to_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Coerce a date, datetime, Timestamp or date string to a ``date``.

    Strings are parsed by pandas, so ISO timestamps ("2025-03-31T12:00:00Z")
    and common forms such as "2022/01/01" or "Jan 1, 2022" are accepted.

    Raises:
        TypeError: If the value is not a date or a string
        ValueError: If a string cannot be parsed as a date
    """
    if value is None:
        return None
    if not isinstance(value, (date, str)):
        raise TypeError(f"Cannot convert {type(value).__name__} to date")
    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"Cannot convert {value!r} to date")
    return timestamp.date()


def years_elapsed(start: DateLike, end: DateLike) -> float:
    """
    Years between two dates using a 365.25-day year.

    The difference is absolute, so argument order does not matter.

    Example:
        >>> round(years_elapsed(date(2022, 1, 1), date(2024, 1, 1)), 2)
        2.0
    """
    start_date = to_date(start)
    end_date = to_date(end)
    return abs((end_date - start_date).days) / DAYS_PER_YEAR
