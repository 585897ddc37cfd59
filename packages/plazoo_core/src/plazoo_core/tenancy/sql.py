"""
SQL Store Directory

Reads the stores and user_roles tables directly through SQLAlchemy. Used
by back-office tooling that connects to the database instead of the REST
API. Queries run in a worker thread so the event loop never blocks.
"""

import asyncio
import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from plazoo_base.db import get_sessionmaker
from plazoo_core.errors import DirectoryError
from plazoo_core.persistence.repo import StoreRepository
from plazoo_core.tenancy.directory import StoreDirectory
from plazoo_core.tenancy.models import Store, ViewerRole

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlStoreDirectory(StoreDirectory):
    """Store directory backed by the database."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory or get_sessionmaker()

    def _run(self, operation: Callable[[StoreRepository], T]) -> T:
        db: Session = self.session_factory()
        try:
            return operation(StoreRepository(db))
        except SQLAlchemyError as e:
            logger.error(f"Store query failed: {e}")
            raise DirectoryError(message=f"Store query failed: {e}", code="DB_ERROR", retryable=True)
        finally:
            db.close()

    async def list_owned_stores(self, user_id: str) -> list[Store]:
        return await asyncio.to_thread(self._run, lambda repo: repo.list_owned(user_id))

    async def list_all_stores(self) -> list[Store]:
        return await asyncio.to_thread(self._run, lambda repo: repo.list_all())

    async def is_admin(self, user_id: str) -> bool:
        return await asyncio.to_thread(
            self._run, lambda repo: repo.has_global_role(user_id, ViewerRole.ADMIN)
        )
