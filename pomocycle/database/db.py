"""Database connection and session management.

The stats database lives at ``$POMOCYCLE_HOME/pomocycle.db`` unless
``POMOCYCLE_DB_URL`` names another SQLAlchemy URL.
"""

import os
from pathlib import Path
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from .models import Base

# ── paths ────────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path(
    os.environ.get("POMOCYCLE_HOME", Path.home() / ".pomocycle")
)
DB_PATH = APP_SUPPORT_DIR / "pomocycle.db"
DB_URL_ENV = "POMOCYCLE_DB_URL"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine: Engine | None = None
_SessionFactory = None


def database_url() -> str:
    """URL of the stats database: the env override or the file on disk."""
    return os.environ.get(DB_URL_ENV) or f"sqlite:///{DB_PATH}"


def _make_engine(url: str) -> Engine:
    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        # Connections may be used off the thread that opened them.
        connect_args["check_same_thread"] = False
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args, echo=False)


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = _make_engine(database_url())
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _SessionFactory = None
    _engine = _make_engine(url)


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
