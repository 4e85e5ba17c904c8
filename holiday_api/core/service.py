# holiday_api/core/service.py
"""
Holiday lookups over a whole catalog.

Resolution errors of single catalog entries are logged and skipped here so
one malformed definition never breaks a query for the rest of the catalog.
"""

import datetime

from holiday_api.core.catalog import CatalogProvider
from holiday_api.core.config import GREGORIAN_FIRST_YEAR
from holiday_api.core.errors import HolidayError
from holiday_api.core.logging_config import get_logger, holiday_context
from holiday_api.core.models import HolidayDefinition, HolidayVerdict, ResolvedHoliday
from holiday_api.core.resolver import resolve_holiday

logger = get_logger(__name__)


class HolidayService:
    """Answers holiday questions using definitions from a catalog provider."""

    def __init__(self, provider: CatalogProvider):
        self.provider = provider

    def _resolve_catalog(self, year: int) -> list[ResolvedHoliday]:
        resolved: list[ResolvedHoliday] = []
        for definition in self.provider.fetch_all_definitions():
            holiday = self._try_resolve(definition, year)
            if holiday is not None:
                resolved.append(holiday)
        return resolved

    @staticmethod
    def _try_resolve(definition: HolidayDefinition, year: int) -> ResolvedHoliday | None:
        try:
            return resolve_holiday(definition, year)
        except (HolidayError, OverflowError) as e:
            logger.warning(
                f"Could not resolve holiday '{definition.name}' for {year}: {e}",
                extra=holiday_context(definition.name, definition.kind, year),
            )
            return None

    def list_holidays_for_year(self, year: int) -> list[ResolvedHoliday]:
        """
        All catalog holidays with their dates in the given year, sorted by date.

        Years before the Gregorian calendar give an empty list.
        """
        if year < GREGORIAN_FIRST_YEAR:
            logger.info(f"Holiday list requested for unsupported year {year}")
            return []
        holidays = self._resolve_catalog(year)
        holidays.sort(key=lambda h: (h.date, h.name))
        return holidays

    def holidays_on(self, day: datetime.date) -> list[ResolvedHoliday]:
        """Catalog holidays that fall on the given date."""
        if isinstance(day, datetime.datetime):
            day = day.date()
        if day.year < GREGORIAN_FIRST_YEAR:
            return []
        return [h for h in self._resolve_catalog(day.year) if h.date == day]

    def is_holiday(self, day: datetime.date) -> HolidayVerdict:
        """HOLIDAY if any catalog holiday falls on the date (time of day is ignored)."""
        if isinstance(day, datetime.datetime):
            day = day.date()
        if day.year < GREGORIAN_FIRST_YEAR:
            return HolidayVerdict.INVALID_DATE
        if self.holidays_on(day):
            return HolidayVerdict.HOLIDAY
        return HolidayVerdict.NOT_HOLIDAY

    def verify_date(self, year: int, month: int, day: int) -> HolidayVerdict:
        """Like is_holiday() but for raw integers. Impossible dates give INVALID_DATE."""
        try:
            date_ = datetime.date(year, month, day)
        except (ValueError, OverflowError):
            return HolidayVerdict.INVALID_DATE
        return self.is_holiday(date_)
