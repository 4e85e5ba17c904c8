# holiday_api/core/config.py

import os
from typing import Final


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


# ==========================
# Kalender
# ==========================

#: Första år i den gregorianska kalendern.
#: Påskberäkningen och alla kalenderdatum är odefinierade före detta år.
GREGORIAN_FIRST_YEAR: Final[int] = 1583

#: Sista år som datetime.date kan representera.
CALENDAR_LAST_YEAR: Final[int] = 9999

#: Index för måndag i Python datetime (0 = måndag, 6 = söndag).
MONDAY: Final[int] = 0

#: Antal dagar per vecka.
DAYS_PER_WEEK: Final[int] = 7


# ==========================
# Serialisering
# ==========================

#: Transportformat för datum i JSON-svar: midnatt UTC.
#: Tiden saknar semantisk betydelse, det är bara datumet som räknas.
DATE_TRANSPORT_FORMAT: Final[str] = "%Y-%m-%dT00:00:00.000+00:00"


# ==========================
# Miljö
# ==========================

IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite:///./holiday_api/database/holidays.db")

#: JSON-fil med standardkatalogen som läses in när databasen är tom.
HOLIDAY_CATALOG_PATH: Final[str] = os.getenv("HOLIDAY_CATALOG_PATH", "data/holidays.json")

#: Årsintervall som HTTP-lagret accepterar. Kärnan kräver bara GREGORIAN_FIRST_YEAR.
HOLIDAY_MIN_YEAR: Final[int] = max(_env_int("HOLIDAY_MIN_YEAR", GREGORIAN_FIRST_YEAR), GREGORIAN_FIRST_YEAR)
HOLIDAY_MAX_YEAR: Final[int] = min(_env_int("HOLIDAY_MAX_YEAR", CALENDAR_LAST_YEAR), CALENDAR_LAST_YEAR)

#: Hur länge katalogen cachas mellan databasläsningar (sekunder). 0 stänger av cachen.
HOLIDAY_CATALOG_CACHE_TTL: Final[int] = _env_int("HOLIDAY_CATALOG_CACHE_TTL", 300)

SERVICE_NAME: Final[str] = "holiday-api"
SERVICE_VERSION: Final[str] = "0.1.0"
