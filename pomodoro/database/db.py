"""SQLite engine and session handling for the phase history.

The engine is bound on first use to ``history.db`` in the application
support directory.  Tests rebind it with :func:`configure_engine`.
All access happens on the Qt event loop thread.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..settings import APP_SUPPORT_DIR
from .models import Base

log = logging.getLogger(__name__)

DB_PATH = APP_SUPPORT_DIR / "history.db"

_engine: Engine | None = None
_sessions: sessionmaker | None = None


def configure_engine(url: str | None = None) -> Engine:
    """Bind the history to *url*, or to the on-disk file when omitted."""
    global _engine, _sessions
    if url is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{DB_PATH}"
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(url)
    _sessions = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def init_db() -> None:
    """Create the ``phases`` table if it does not exist yet."""
    engine = _engine or configure_engine()
    Base.metadata.create_all(engine)
    log.debug("History database ready at %s", engine.url)


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    if _sessions is None:
        configure_engine()
    session: OrmSession = _sessions()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
