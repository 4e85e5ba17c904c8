# holiday_api/routes/holidays.py
"""
Holiday API endpoints: verify a date and list a year's holidays.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from holiday_api.core.catalog import CachedCatalogProvider, CatalogProvider, DatabaseCatalogProvider
from holiday_api.core.config import DATE_TRANSPORT_FORMAT, HOLIDAY_CATALOG_CACHE_TTL
from holiday_api.core.logging_config import get_logger
from holiday_api.core.models import HolidayKind, HolidayVerdict, ResolvedHoliday
from holiday_api.core.service import HolidayService
from holiday_api.core.validators import is_year_in_range, validate_year
from holiday_api.database.database import SessionLocal

logger = get_logger(__name__)

router = APIRouter(prefix="/holidays", tags=["holidays"])


class HolidayOut(BaseModel):
    """A resolved holiday as sent over HTTP. date is midnight UTC."""

    name: str
    date: str

    @classmethod
    def from_resolved(cls, holiday: ResolvedHoliday) -> "HolidayOut":
        return cls(name=holiday.name, date=holiday.date.strftime(DATE_TRANSPORT_FORMAT))


class HolidayTypeOut(BaseModel):
    id: int
    code: str
    name: str


@lru_cache
def get_catalog_provider() -> CatalogProvider:
    """Process-wide catalog provider backed by the database."""
    return CachedCatalogProvider(DatabaseCatalogProvider(SessionLocal), HOLIDAY_CATALOG_CACHE_TTL)


def get_holiday_service(provider: CatalogProvider = Depends(get_catalog_provider)) -> HolidayService:
    """Dependency for getting a holiday service."""
    return HolidayService(provider)


@router.get("/verify/{year}/{month}/{day}", response_model=HolidayVerdict)
async def verify_holiday(
    year: int,
    month: int,
    day: int,
    service: HolidayService = Depends(get_holiday_service),
):
    """Check whether a date is a holiday. Out-of-range years and impossible dates give INVALID_DATE."""
    if not is_year_in_range(year):
        logger.debug(f"Verify requested for year {year} outside accepted range")
        return HolidayVerdict.INVALID_DATE

    return service.verify_date(year, month, day)


@router.get("/list/{year}", response_model=list[HolidayOut])
async def list_holidays(
    year: int,
    service: HolidayService = Depends(get_holiday_service),
):
    """All holidays of a year with concrete dates, ordered by date."""
    year = validate_year(year)
    return [HolidayOut.from_resolved(h) for h in service.list_holidays_for_year(year)]


@router.get("/types", response_model=list[HolidayTypeOut])
async def list_holiday_types():
    """The holiday kinds a catalog entry can have."""
    return [HolidayTypeOut(id=kind.value, code=kind.name, name=kind.label) for kind in HolidayKind]
