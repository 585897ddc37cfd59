"""
Store Directory

Abstract interface for the tenant data source.
Implementations: REST (hosted backend), SQL, static (development).
"""

from abc import ABC, abstractmethod
from typing import Iterable

from plazoo_core.tenancy.models import Store, ViewerRole


class StoreDirectory(ABC):
    """
    Read-only, eventually consistent view of stores and roles.

    Store lists are ordered by name. Implementations raise DirectoryError on
    failure; callers on read paths decide how to degrade.
    """

    @abstractmethod
    async def list_owned_stores(self, user_id: str) -> list[Store]:
        """Stores whose owner is ``user_id``."""
        ...

    @abstractmethod
    async def list_all_stores(self) -> list[Store]:
        """Every store. Only meaningful for admins; the backend enforces it."""
        ...

    @abstractmethod
    async def is_admin(self, user_id: str) -> bool:
        """Whether ``user_id`` holds the global admin role."""
        ...

    async def resolve_role(self, user_id: str) -> ViewerRole:
        return ViewerRole.ADMIN if await self.is_admin(user_id) else ViewerRole.OWNER

    async def close(self) -> None:
        """Release resources (HTTP clients, sessions)."""
        return None


class StaticStoreDirectory(StoreDirectory):
    """In-memory directory for development and the CLI."""

    def __init__(self, stores: Iterable[Store] = (), admins: Iterable[str] = ()):
        self.stores = list(stores)
        self.admins = set(admins)

    async def list_owned_stores(self, user_id: str) -> list[Store]:
        return sorted((s for s in self.stores if s.owner_id == user_id), key=lambda s: s.name)

    async def list_all_stores(self) -> list[Store]:
        return sorted(self.stores, key=lambda s: s.name)

    async def is_admin(self, user_id: str) -> bool:
        return user_id in self.admins
