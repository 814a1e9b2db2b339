"""Database package."""

from .db import configure_engine, get_session, init_db
from .history import completed_count, record_phase
from .models import PhaseRecord

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "completed_count",
    "record_phase",
    "PhaseRecord",
]
