# holiday_api/core/resolver.py
"""
Turns a holiday definition plus a year into a concrete date.
"""

import datetime

from holiday_api.core.config import DAYS_PER_WEEK, MONDAY
from holiday_api.core.easter import easter_offset
from holiday_api.core.errors import InvalidCalendarDate, InvalidHolidayKind
from holiday_api.core.models import HolidayDefinition, HolidayKind, ResolvedHoliday


def next_monday(date_: datetime.date) -> datetime.date:
    """
    First Monday on or after the given date.

    A Monday is returned unchanged, any other day moves forward 1-6 days.
    """
    delta = (DAYS_PER_WEEK - date_.weekday() + MONDAY) % DAYS_PER_WEEK
    if delta == 0:
        return date_
    return date_ + datetime.timedelta(days=delta)


def fixed_date(year: int, month: int | None, day: int | None) -> datetime.date:
    """
    Build a calendar date, refusing combinations that do not exist.

    Raises:
        InvalidCalendarDate: For e.g. April 31 or February 29 in a non-leap year
    """
    if month is None or day is None:
        raise InvalidCalendarDate(year, month, day)
    try:
        return datetime.date(year, month, day)
    except ValueError as e:
        raise InvalidCalendarDate(year, month, day) from e


def resolve(definition: HolidayDefinition, year: int) -> datetime.date:
    """
    Concrete date of a holiday definition in the given year.

    Raises:
        InvalidCalendarDate: Fixed holiday whose day/month do not exist in year
        InvalidHolidayKind: Definition kind is not one of HolidayKind
        UnsupportedYear: Easter-relative holiday before the Gregorian calendar
    """
    kind = definition.kind

    if kind == HolidayKind.FIXED:
        return fixed_date(year, definition.month, definition.day)

    if kind == HolidayKind.FIXED_SHIFTED:
        return next_monday(fixed_date(year, definition.month, definition.day))

    if kind == HolidayKind.EASTER_RELATIVE:
        return easter_offset(year, definition.easter_offset_days)

    if kind == HolidayKind.EASTER_RELATIVE_SHIFTED:
        return next_monday(easter_offset(year, definition.easter_offset_days))

    raise InvalidHolidayKind(kind)


def resolve_holiday(definition: HolidayDefinition, year: int) -> ResolvedHoliday:
    """Same as resolve() but keeps the holiday name with the date."""
    return ResolvedHoliday(name=definition.name, date=resolve(definition, year))
