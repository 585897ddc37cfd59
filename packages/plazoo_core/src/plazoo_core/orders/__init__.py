"""
Orders: atomic, idempotent order submission.
"""

from plazoo_core.orders.writer import (
    Customer,
    OrderDraft,
    OrderReceipt,
    OrderType,
    OrderWriter,
    new_idempotency_key,
)

__all__ = [
    "Customer",
    "OrderDraft",
    "OrderReceipt",
    "OrderType",
    "OrderWriter",
    "new_idempotency_key",
]
