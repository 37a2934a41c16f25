"""Database package: engine, session factory, init_db(), get_session()."""

import threading
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from drop_orders.config import DATABASE_URL
from drop_orders.db.base import Base

# Import all models so Base.metadata has all tables
from drop_orders.db.models import Drop, DropParticipation, Member, Profile  # noqa: F401

_init_lock = threading.Lock()
_engine: Engine | None = None
_engine_url: str | None = None
_SessionLocal: sessionmaker | None = None

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _get_engine(url: str) -> Engine:
    """Create engine; SQLite gets check_same_thread=False for use from executor threads."""
    if url in _MEMORY_URLS:
        # One shared connection, otherwise every session sees its own empty database
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    if url.startswith("sqlite"):
        if "?" in url:
            url += "&check_same_thread=False"
        else:
            url += "?check_same_thread=False"
    return create_engine(url, echo=False)


def init_db(url: str | None = None) -> None:
    """Create engine and tables. A no-op when already initialised for the same URL."""
    global _engine, _engine_url, _SessionLocal
    target = url or DATABASE_URL
    with _init_lock:
        if _SessionLocal is not None and _engine_url == target:
            return
        if _engine is not None:
            _engine.dispose()
        _engine = _get_engine(target)
        _engine_url = target
        Base.metadata.create_all(bind=_engine)
        _SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False, expire_on_commit=False)


def reset_db() -> None:
    """Drop and recreate every table on the current engine."""
    init_db(_engine_url)
    Base.metadata.drop_all(bind=_engine)
    Base.metadata.create_all(bind=_engine)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Context manager yielding a DB session. Calls init_db() on first use."""
    if _SessionLocal is None:
        init_db()
    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
