"""Writing and querying finished phases."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from .db import get_session
from .models import PhaseRecord


def record_phase(
    phase: str,
    started_at: datetime,
    ended_at: datetime,
    planned_seconds: float,
    elapsed_seconds: float,
    completed: bool,
) -> int:
    """Insert one finished phase and return its row id."""
    with get_session() as db:
        record = PhaseRecord(
            phase=phase,
            started_at=started_at,
            ended_at=ended_at,
            planned_seconds=planned_seconds,
            elapsed_seconds=max(0.0, elapsed_seconds),
            completed=completed,
        )
        db.add(record)
        db.flush()
        return record.id


def completed_count(phase: str = "work", on: date | None = None) -> int:
    """Number of phases of *phase* that ran to expiry on the given day."""
    day = on or date.today()
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1)
    with get_session() as db:
        return (
            db.query(PhaseRecord)
            .filter(
                PhaseRecord.phase == phase,
                PhaseRecord.completed.is_(True),
                PhaseRecord.ended_at >= start,
                PhaseRecord.ended_at < end,
            )
            .count()
        )
