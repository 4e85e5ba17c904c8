# holiday_api/core/errors.py
"""
Error types raised while resolving holiday definitions.
"""


class HolidayError(ValueError):
    """Base class for all holiday resolution errors."""

    pass


class InvalidCalendarDate(HolidayError):
    """A (year, month, day) combination that does not exist."""

    def __init__(self, year: int, month: int | None, day: int | None):
        self.year = year
        self.month = month
        self.day = day
        super().__init__(f"Invalid calendar date: {year}-{month}-{day}")


class InvalidHolidayKind(HolidayError):
    """Catalog entry carries a kind tag outside the known variants."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown holiday kind: {kind!r}")


class UnsupportedYear(HolidayError):
    """Year outside the Gregorian calendar."""

    def __init__(self, year: int, minimum: int):
        self.year = year
        self.minimum = minimum
        super().__init__(f"Year {year} is not supported (minimum {minimum})")
