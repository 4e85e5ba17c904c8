# holiday_api/core/catalog.py
"""
Holiday catalog providers.

The service only needs read access to the full list of holiday definitions.
Where they come from (database, JSON, memory) and how long they are cached is
decided by whoever builds the provider.
"""

import threading
import time
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from pydantic import ValidationError
from sqlalchemy.orm import Session

from holiday_api.core.errors import InvalidHolidayKind
from holiday_api.core.logging_config import get_logger
from holiday_api.core.models import HolidayDefinition, HolidayKind
from holiday_api.database.database import Holiday

logger = get_logger(__name__)


class CatalogProvider(Protocol):
    """Read-only source of holiday definitions."""

    def fetch_all_definitions(self) -> Sequence[HolidayDefinition]: ...


class StaticCatalogProvider:
    """Fixed in-memory catalog."""

    def __init__(self, definitions: Iterable[HolidayDefinition]):
        self._definitions = tuple(definitions)

    def fetch_all_definitions(self) -> Sequence[HolidayDefinition]:
        return self._definitions


def definition_from_row(row: Holiday) -> HolidayDefinition:
    """
    Convert a holidays table row to a HolidayDefinition.

    Raises:
        InvalidHolidayKind: If the row's type_id is not a known HolidayKind
        ValidationError: If the row's fields do not fit its kind
    """
    try:
        kind = HolidayKind(row.type_id)
    except ValueError as e:
        raise InvalidHolidayKind(row.type_id) from e

    return HolidayDefinition(
        name=row.name,
        kind=kind,
        day=row.day,
        month=row.month,
        easter_offset_days=row.easter_offset_days or 0,
    )


class DatabaseCatalogProvider:
    """
    Reads the catalog from the holidays table.

    Opens a short-lived session per fetch so the provider can outlive a
    request. Rows that cannot be turned into a definition are logged and
    left out.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def fetch_all_definitions(self) -> Sequence[HolidayDefinition]:
        definitions: list[HolidayDefinition] = []
        with self._session_factory() as session:
            rows = session.query(Holiday).order_by(Holiday.id).all()
            for row in rows:
                try:
                    definitions.append(definition_from_row(row))
                except (InvalidHolidayKind, ValidationError) as e:
                    logger.error(
                        f"Skipping malformed holiday row {row.id} ({row.name}): {e}",
                        extra={"extra_fields": {"holiday_id": row.id, "type_id": row.type_id}},
                    )
        return definitions


class CachedCatalogProvider:
    """
    Keeps the last fetched catalog for ttl_seconds.

    A ttl of 0 disables caching. Safe to share between threads.
    """

    def __init__(
        self,
        inner: CatalogProvider,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._inner = inner
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._cached: tuple[HolidayDefinition, ...] | None = None
        self._fetched_at = 0.0

    def fetch_all_definitions(self) -> Sequence[HolidayDefinition]:
        if self._ttl <= 0:
            return tuple(self._inner.fetch_all_definitions())

        with self._lock:
            now = self._clock()
            if self._cached is None or now - self._fetched_at >= self._ttl:
                self._cached = tuple(self._inner.fetch_all_definitions())
                self._fetched_at = now
                logger.debug(f"Holiday catalog refreshed ({len(self._cached)} definitions)")
            return self._cached

    def clear(self) -> None:
        """Drop the cached catalog so the next fetch reads the source again."""
        with self._lock:
            self._cached = None
