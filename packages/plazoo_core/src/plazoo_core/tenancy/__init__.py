"""
Tenancy: stores, viewer roles, selection storage and the store context resolver.

The SQL and REST directories live in ``plazoo_core.tenancy.sql`` and
``plazoo_core.tenancy.rest``.
"""

from plazoo_core.tenancy.directory import StaticStoreDirectory, StoreDirectory
from plazoo_core.tenancy.models import Store, StoreMode, ViewerRole
from plazoo_core.tenancy.policy import AccessPolicy
from plazoo_core.tenancy.resolver import ResolverState, StoreContext, StoreContextResolver
from plazoo_core.tenancy.storage import (
    SELECTED_STORE_KEY,
    MemorySelectionStorage,
    RedisSelectionStorage,
    SelectionStorage,
)

__all__ = [
    "StaticStoreDirectory",
    "StoreDirectory",
    "Store",
    "StoreMode",
    "ViewerRole",
    "AccessPolicy",
    "ResolverState",
    "StoreContext",
    "StoreContextResolver",
    "SELECTED_STORE_KEY",
    "MemorySelectionStorage",
    "RedisSelectionStorage",
    "SelectionStorage",
]
