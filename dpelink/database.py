"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for the diagnostic registry and the
opportunity-to-diagnostic link tables.
"""

import uuid
from datetime import datetime
from pathlib import Path

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class EnergyDiagnostic(Base):
    """Energy diagnostic (DPE) registry record."""

    __tablename__ = "energy_diagnostics"

    id = Column(String, primary_key=True, default=_new_id)
    external_id = Column(String, nullable=False, unique=True)  # ADEME identifier
    address = Column(String, nullable=True)  # "street zip city"
    zip_code = Column(String(5), nullable=False)
    energy_class = Column(String(1), nullable=False)
    square_footage = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        Index("ix_energy_diagnostics_search", "zip_code", "energy_class", "square_footage"),
    )


class AuctionDiagnosticLink(Base):
    """Link between an auction and a plausible energy diagnostic."""

    __tablename__ = "auction_energy_diagnostic_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    auction_id = Column(String, nullable=False, index=True)
    energy_diagnostic_id = Column(String, ForeignKey("energy_diagnostics.id"), nullable=False)
    match_score = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        UniqueConstraint("auction_id", "energy_diagnostic_id", name="uq_auction_diagnostic"),
    )


class ListingDiagnosticLink(Base):
    """Link between a listing and a plausible energy diagnostic."""

    __tablename__ = "listing_energy_diagnostic_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    listing_id = Column(String, nullable=False, index=True)
    energy_diagnostic_id = Column(String, ForeignKey("energy_diagnostics.id"), nullable=False)
    match_score = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        UniqueConstraint("listing_id", "energy_diagnostic_id", name="uq_listing_diagnostic"),
    )


def get_engine(db_path: Path):
    return create_engine(f"sqlite:///{db_path}")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(get_engine(db_path))


def get_session_factory(db_path: Path) -> sessionmaker:
    """
    Session factory bound to one database; repositories open a session per call.

    Args:
        db_path: Path to SQLite database file
    """
    return sessionmaker(bind=get_engine(db_path))


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    return get_session_factory(db_path)()
