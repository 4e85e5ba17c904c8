# holiday_api/core/easter.py
"""
Computus: the Gregorian date of Easter Sunday.
"""

import datetime

from holiday_api.core.config import GREGORIAN_FIRST_YEAR
from holiday_api.core.errors import UnsupportedYear


def easter_sunday(year: int) -> datetime.date:
    """
    Anonymous Gregorian algorithm (Meeus/Jones/Butcher).

    Valid for every Gregorian year from 1583 on. The result is always a Sunday
    between March 22 and April 25.

    Raises:
        UnsupportedYear: If year is before the Gregorian calendar
    """
    if year < GREGORIAN_FIRST_YEAR:
        raise UnsupportedYear(year, GREGORIAN_FIRST_YEAR)

    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def easter_offset(year: int, days: int) -> datetime.date:
    """Date `days` after Easter Sunday (negative for days before)."""
    return easter_sunday(year) + datetime.timedelta(days=days)
