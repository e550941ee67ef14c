"""
SQLAlchemy engine and session factory for the hosted Postgres store.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from bizdesk.core.config import Settings, get_settings

Base = declarative_base()

_engine = None
_SessionLocal = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_size": settings.pool_size, "max_overflow": settings.max_overflow, "pool_pre_ping": True}


def get_engine():
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(
            settings.database_url,
            echo=False,
            **_engine_options(settings),
        )
    return _engine


def make_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = make_session_factory(get_engine())
    return _SessionLocal


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """One unit of work: commit on success, rollback on error, always close."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Context manager for a single request-scoped DB session."""
    with session_scope(get_session_factory()) as session:
        yield session
