# database/db_setup.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import DEFAULT_DB_URL

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()

# ---------------------------------------------------------------------
# Session factory (rebound by init_db)
# ---------------------------------------------------------------------
SessionLocal = sessionmaker(autoflush=False, autocommit=False, expire_on_commit=False)

_engine: Optional[Engine] = None


# ---------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------
def get_engine(url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    """
    Return a SQLAlchemy Engine for `url`.

    In-memory SQLite gets a StaticPool so every session shares the same
    connection (and therefore the same database).

    Example:
        engine = get_engine("sqlite:///coasterforge.db")
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, future=True, **kwargs)
    return create_engine(url, echo=echo, future=True, pool_pre_ping=True)


def init_db(url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    """Bind the session factory to a fresh engine and create missing tables."""
    global _engine
    # models must be imported so their tables are registered on Base
    from . import models  # noqa: F401

    if _engine is not None:
        _engine.dispose()
    _engine = get_engine(url, echo=echo)
    SessionLocal.configure(bind=_engine)
    Base.metadata.create_all(_engine)
    return _engine


def current_engine() -> Optional[Engine]:
    return _engine
