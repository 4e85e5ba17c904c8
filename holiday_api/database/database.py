# holiday_api/database/database.py
"""
SQLAlchemy database setup and models for the holiday catalog.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import Column, ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from holiday_api.core.config import DATABASE_URL
from holiday_api.core.models import HolidayDefinition, HolidayKind

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class HolidayType(Base):
    """Kind of holiday rule. Ids match HolidayKind values."""

    __tablename__ = "holiday_types"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<HolidayType(id={self.id}, name={self.name!r})>"


class Holiday(Base):
    """Holiday catalog entry."""

    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    day = Column(Integer, nullable=True)  # Only for fixed kinds
    month = Column(Integer, nullable=True)  # Only for fixed kinds
    easter_offset_days = Column(Integer, nullable=False, default=0)
    type_id = Column(Integer, ForeignKey("holiday_types.id"), nullable=False)

    def __repr__(self):
        return f"<Holiday(id={self.id}, name={self.name!r}, type_id={self.type_id})>"


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_holiday_types(db: Session) -> int:
    """Insert missing holiday type rows. Returns number of rows added."""
    existing = {row.id for row in db.query(HolidayType.id).all()}
    added = 0
    for kind in HolidayKind:
        if kind.value not in existing:
            db.add(HolidayType(id=kind.value, name=kind.label))
            added += 1
    if added:
        db.commit()
    return added


def seed_catalog(db: Session, definitions: Iterable[HolidayDefinition]) -> int:
    """
    Populate an empty holiday catalog.

    Does nothing if the holidays table already has rows, so an edited catalog
    is never overwritten on restart.

    Returns:
        Number of holidays inserted
    """
    seed_holiday_types(db)

    if db.query(Holiday.id).first() is not None:
        logger.debug("Holiday catalog already populated, skipping seed")
        return 0

    count = 0
    for definition in definitions:
        db.add(
            Holiday(
                name=definition.name,
                day=definition.day,
                month=definition.month,
                easter_offset_days=definition.easter_offset_days,
                type_id=definition.kind.value,
            )
        )
        count += 1
    db.commit()

    logger.info(f"Seeded holiday catalog with {count} holidays")
    return count
