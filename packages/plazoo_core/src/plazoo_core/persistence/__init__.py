"""
Plazoo persistence: SQLAlchemy models and repositories.
"""

from plazoo_core.persistence.models import (
    OrderItemAddOnRecord,
    OrderItemRecord,
    OrderRecord,
    StoreRecord,
    UserRoleRecord,
    create_tables,
)
from plazoo_core.persistence.repo import OrderRepository, StoreRepository

__all__ = [
    "OrderItemAddOnRecord",
    "OrderItemRecord",
    "OrderRecord",
    "StoreRecord",
    "UserRoleRecord",
    "create_tables",
    "OrderRepository",
    "StoreRepository",
]
