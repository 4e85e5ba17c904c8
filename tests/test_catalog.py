"""
Tests for catalog providers, the catalog data file and database seeding.
"""

import json

import pytest
from pydantic import ValidationError
from sqlalchemy import inspect

from holiday_api.core.catalog import (
    CachedCatalogProvider,
    DatabaseCatalogProvider,
    StaticCatalogProvider,
    definition_from_row,
)
from holiday_api.core.errors import InvalidHolidayKind
from holiday_api.core.models import HolidayDefinition, HolidayKind
from holiday_api.core.storage import StorageError, load_holiday_definitions
from holiday_api.database.database import Holiday, HolidayType, seed_catalog


class CountingProvider:
    """Provider that records how often it is asked for the catalog."""

    def __init__(self, definitions):
        self.definitions = list(definitions)
        self.calls = 0

    def fetch_all_definitions(self):
        self.calls += 1
        return list(self.definitions)


NEW_YEAR = HolidayDefinition(name="New Year", kind=HolidayKind.FIXED, day=1, month=1)


class TestHolidayDefinition:
    def test_fixed_requires_day_and_month(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(name="No day", kind=HolidayKind.FIXED, month=1)

    def test_day_range(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(name="Day 32", kind=HolidayKind.FIXED, day=32, month=1)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(name="Odd", kind=5, easter_offset_days=0)

    def test_easter_relative_needs_no_date(self):
        definition = HolidayDefinition(name="Good Friday", kind=3, easter_offset_days=-2)
        assert definition.kind == HolidayKind.EASTER_RELATIVE
        assert definition.day is None

    def test_easter_relative_rejects_day_and_month(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(
                name="Dated Easter", kind=HolidayKind.EASTER_RELATIVE, day=5, month=5, easter_offset_days=3
            )

    def test_fixed_rejects_easter_offset(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(name="Offset New Year", kind=HolidayKind.FIXED, day=1, month=1, easter_offset_days=40)

    def test_fixed_rejects_date_missing_from_every_year(self):
        with pytest.raises(ValidationError):
            HolidayDefinition(name="April 31", kind=HolidayKind.FIXED, day=31, month=4)
        with pytest.raises(ValidationError):
            HolidayDefinition(name="Feb 30", kind=HolidayKind.FIXED_SHIFTED, day=30, month=2)

    def test_leap_day_accepted(self):
        definition = HolidayDefinition(name="Leap Day", kind=HolidayKind.FIXED, day=29, month=2)
        assert (definition.month, definition.day) == (2, 29)

    def test_immutable(self):
        with pytest.raises(ValidationError):
            NEW_YEAR.day = 2

    def test_kind_labels(self):
        assert HolidayKind.FIXED.is_fixed
        assert not HolidayKind.EASTER_RELATIVE_SHIFTED.is_fixed
        assert HolidayKind.FIXED.label == "Fixed"


class TestStorage:
    def test_default_catalog(self, catalog_definitions):
        assert len(catalog_definitions) == 19
        assert catalog_definitions[0] == NEW_YEAR.model_copy(update={"name": "Año Nuevo"})

    def test_missing_file(self, tmp_path):
        with pytest.raises(StorageError):
            load_holiday_definitions(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "holidays.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(StorageError):
            load_holiday_definitions(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "holidays.json"
        path.write_text(json.dumps({"name": "New Year"}), encoding="utf-8")
        with pytest.raises(StorageError):
            load_holiday_definitions(path)

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "holidays.json"
        path.write_text(json.dumps([{"name": "Bad", "kind": 9}]), encoding="utf-8")
        with pytest.raises(StorageError):
            load_holiday_definitions(path)


class TestStaticCatalogProvider:
    def test_returns_definitions(self):
        provider = StaticCatalogProvider([NEW_YEAR])
        assert list(provider.fetch_all_definitions()) == [NEW_YEAR]

    def test_copies_input(self):
        definitions = [NEW_YEAR]
        provider = StaticCatalogProvider(definitions)
        definitions.clear()
        assert len(provider.fetch_all_definitions()) == 1


class TestCachedCatalogProvider:
    def test_caches_within_ttl(self):
        now = [100.0]
        inner = CountingProvider([NEW_YEAR])
        provider = CachedCatalogProvider(inner, ttl_seconds=60, clock=lambda: now[0])

        provider.fetch_all_definitions()
        now[0] += 59
        provider.fetch_all_definitions()

        assert inner.calls == 1

    def test_refreshes_after_ttl(self):
        now = [100.0]
        inner = CountingProvider([NEW_YEAR])
        provider = CachedCatalogProvider(inner, ttl_seconds=60, clock=lambda: now[0])

        provider.fetch_all_definitions()
        now[0] += 60
        provider.fetch_all_definitions()

        assert inner.calls == 2

    def test_clear(self):
        inner = CountingProvider([NEW_YEAR])
        provider = CachedCatalogProvider(inner, ttl_seconds=60)

        provider.fetch_all_definitions()
        provider.clear()
        provider.fetch_all_definitions()

        assert inner.calls == 2

    def test_zero_ttl_disables_cache(self):
        inner = CountingProvider([NEW_YEAR])
        provider = CachedCatalogProvider(inner, ttl_seconds=0)

        provider.fetch_all_definitions()
        provider.fetch_all_definitions()

        assert inner.calls == 2


class TestDatabaseCatalog:
    def test_holidays_table_columns(self):
        """Only the catalog fields are stored, with no ORM relationships between the tables."""
        assert set(Holiday.__table__.columns.keys()) == {"id", "name", "day", "month", "easter_offset_days", "type_id"}
        assert len(inspect(Holiday).relationships) == 0
        assert len(inspect(HolidayType).relationships) == 0

    def test_seed_inserts_types_and_holidays(self, test_db):
        assert test_db.query(HolidayType).count() == 4
        assert test_db.query(Holiday).count() == 19
        assert test_db.get(HolidayType, 2).name == HolidayKind.FIXED_SHIFTED.label

    def test_seed_skips_populated_catalog(self, test_db, catalog_definitions):
        assert seed_catalog(test_db, catalog_definitions) == 0
        assert test_db.query(Holiday).count() == 19

    def test_provider_reads_catalog(self, test_db, test_session_factory, catalog_definitions):
        provider = DatabaseCatalogProvider(test_session_factory)
        assert list(provider.fetch_all_definitions()) == list(catalog_definitions)

    def test_provider_skips_malformed_rows(self, test_db, test_session_factory):
        test_db.add(Holiday(name="Unknown kind", type_id=9, easter_offset_days=0))
        test_db.add(Holiday(name="Fixed without day", type_id=1, month=5, easter_offset_days=0))
        test_db.add(Holiday(name="Dated Easter", type_id=3, day=5, month=5, easter_offset_days=3))
        test_db.commit()

        definitions = DatabaseCatalogProvider(test_session_factory).fetch_all_definitions()

        names = {d.name for d in definitions}
        assert len(definitions) == 19
        assert "Unknown kind" not in names
        assert "Fixed without day" not in names
        assert "Dated Easter" not in names

    def test_definition_from_row_unknown_kind(self):
        with pytest.raises(InvalidHolidayKind):
            definition_from_row(Holiday(id=1, name="Broken", type_id=42, easter_offset_days=0))

    def test_definition_from_row(self):
        row = Holiday(id=1, name="Corpus Christi", type_id=4, easter_offset_days=60)
        definition = definition_from_row(row)
        assert definition.kind == HolidayKind.EASTER_RELATIVE_SHIFTED
        assert definition.easter_offset_days == 60
