"""
Database access for Plazoo.

The engine and session factory are built on first use from DATABASE_URL.
Callers either own a session (``session_scope``) or hand a sessionmaker to
a repository-backed service.
"""

import functools
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from plazoo_base.settings import get_settings

Base = declarative_base()


def _connect_args(url: str) -> dict:
    # SQL directories query from worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


@functools.lru_cache()
def get_engine() -> Engine:
    """Engine for DATABASE_URL (cached; no connection until first use)."""
    url = get_settings().DATABASE_URL
    return create_engine(url, pool_pre_ping=True, connect_args=_connect_args(url))


@functools.lru_cache()
def get_sessionmaker() -> sessionmaker:
    """Session factory bound to the cached engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


@contextmanager
def session_scope(factory=None) -> Iterator[Session]:
    """
    Transactional scope: commit on success, rollback on error.

    Args:
        factory: Optional sessionmaker, defaults to the cached one
    """
    SessionLocal = factory or get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

