#!/usr/bin/env python3
"""
Migration script: Import the holiday catalog from JSON to the database.

Usage:
    python migrate_seed_holidays.py [catalog.json] [--replace]

This will:
1. Create tables (if missing)
2. Insert the four holiday types
3. Import all holidays from the catalog file
   (with --replace, existing holidays are deleted first)
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from holiday_api.core.config import HOLIDAY_CATALOG_PATH
from holiday_api.core.errors import HolidayError
from holiday_api.core.resolver import resolve
from holiday_api.core.storage import StorageError, load_holiday_definitions
from holiday_api.database.database import Holiday, SessionLocal, create_tables, seed_catalog


def migrate(catalog_path: str, replace: bool) -> bool:
    """Run the migration."""
    print("\n" + "=" * 50)
    print(f"MIGRATION: {catalog_path} -> database")
    print("=" * 50 + "\n")

    print("1. Loading catalog...")
    try:
        definitions = load_holiday_definitions(catalog_path)
    except StorageError as e:
        print(f"   [ERROR] {e}")
        return False
    print(f"   [OK] Found {len(definitions)} holidays")

    print("\n2. Creating database tables...")
    create_tables()
    print("   [OK] Tables created")

    db = SessionLocal()
    try:
        existing_count = db.query(Holiday).count()
        if existing_count > 0:
            if not replace:
                print(f"\n   [WARNING] Database already has {existing_count} holidays.")
                print("   Run with --replace to delete them and re-import.")
                return False
            db.query(Holiday).delete()
            db.commit()
            print(f"   [OK] Deleted {existing_count} existing holidays")

        print("\n3. Importing holidays...")
        count = seed_catalog(db, definitions)
        for definition in definitions:
            # Preview with a leap year so Feb 29 rules show a date
            try:
                preview = resolve(definition, 2024)
            except HolidayError as e:
                preview = f"[WARNING] {e}"
            print(f"  + {definition.name:30s} {definition.kind.name:24s} 2024: {preview}")
        print(f"   [OK] Imported {count} holidays")

        print("\n" + "=" * 50)
        print("MIGRATION COMPLETE")
        print("=" * 50)
        return True

    except Exception as e:
        print(f"\n   [ERROR] Error during migration: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    success = migrate(args[0] if args else HOLIDAY_CATALOG_PATH, "--replace" in sys.argv)
    sys.exit(0 if success else 1)
