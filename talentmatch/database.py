"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for jobs, candidates and employment histories.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text, create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

Base = declarative_base()


class Job(Base):
    """Job opening model."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    client_name = Column(String, nullable=True)
    client_focus = Column(Text, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String(2), nullable=True)
    mode = Column(String, nullable=False, default="onsite")  # onsite, remote, hybrid
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class Candidate(Base):
    """Candidate profile model."""

    __tablename__ = "candidates"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    location = Column(String, nullable=False, default="")
    years_hint = Column(Integer, nullable=True)
    is_invalidated = Column(Boolean, nullable=False, default=False)
    invalidated_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    history = relationship(
        "EmploymentHistoryRecord",
        back_populates="candidate",
        uselist=False,
        cascade="all, delete-orphan",
    )


class EmploymentHistoryRecord(Base):
    """Employment history model; sequences are index-aligned, most recent first."""

    __tablename__ = "employment_histories"

    candidate_id = Column(String, ForeignKey("candidates.id"), primary_key=True)
    organizations = Column(JSON, nullable=False, default=list)
    titles = Column(JSON, nullable=False, default=list)
    date_phrases = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    candidate = relationship("Candidate", back_populates="history")


def get_engine(db_path: Path):
    """Create an engine for a SQLite file; callers dispose it when done."""
    return create_engine(f"sqlite:///{Path(db_path).resolve()}")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_path))
    return Session()
