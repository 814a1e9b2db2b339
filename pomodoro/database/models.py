"""SQLAlchemy ORM models for the phase history."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class PhaseRecord(Base):
    """One work or rest phase, finished by expiry or by a manual stop."""

    __tablename__ = "phases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phase = Column(String(8), nullable=False, default="work")  # work | rest
    started_at = Column(DateTime, nullable=False, default=datetime.now)
    ended_at = Column(DateTime, nullable=False, default=datetime.now)
    planned_seconds = Column(Float, nullable=False, default=0.0)
    elapsed_seconds = Column(Float, nullable=False, default=0.0)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<PhaseRecord id={self.id} phase={self.phase} "
            f"completed={self.completed}>"
        )
