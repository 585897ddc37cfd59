"""
Pricing: Decimal money helpers, discounts, line and order totals.
"""

from plazoo_core.pricing.engine import (
    AddOn,
    Discount,
    DiscountType,
    LineItem,
    OrderBreakdown,
    apply_discount,
    clamp_discount,
    line_total,
    order_total,
    price_order,
)
from plazoo_core.pricing.money import format_brl, quantize, to_decimal

__all__ = [
    "AddOn",
    "Discount",
    "DiscountType",
    "LineItem",
    "OrderBreakdown",
    "apply_discount",
    "clamp_discount",
    "line_total",
    "order_total",
    "price_order",
    "format_brl",
    "quantize",
    "to_decimal",
]
