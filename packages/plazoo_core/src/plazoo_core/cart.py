"""
Shopping cart.

Used by the counter sale form, the catalog and the restaurant menu. Adding
a line identical to an existing one (same item, variant, size, add-ons and
notes) bumps that line's quantity instead of creating a new one.
"""

import logging
from typing import Iterator

from plazoo_core.errors import PricingError
from plazoo_core.pricing.engine import Discount, LineItem, OrderBreakdown, price_order
from plazoo_core.pricing.money import ZERO, quantize

logger = logging.getLogger(__name__)

# Cap for an add-on when the menu item doesn't set one
DEFAULT_ADD_ON_MAX_QUANTITY = 10


def adjust_add_on_quantity(current: int, delta: int, max_quantity: int | None = None) -> int:
    """
    Step an add-on quantity.

    Returns the new quantity; 0 means the add-on is deselected. Steps past
    the cap are ignored.
    """
    cap = max_quantity or DEFAULT_ADD_ON_MAX_QUANTITY
    new_quantity = current + delta
    if new_quantity <= 0:
        return 0
    if new_quantity > cap:
        return current
    return new_quantity


def _merge_key(line: LineItem) -> tuple:
    return (
        line.product_id,
        line.menu_item_id,
        line.variant_id,
        line.size_id,
        tuple(sorted((str(k), str(v)) for k, v in line.selected_variants.items())),
        tuple(sorted((a.addon_id or a.name or "", a.quantity, a.price) for a in line.add_ons)),
        line.notes or None,
        line.discount,
    )


class Cart:
    """Ordered list of lines for one store."""

    def __init__(self, store_id: str | None = None):
        self.store_id = store_id
        self._lines: list[LineItem] = []

    @property
    def lines(self) -> list[LineItem]:
        return list(self._lines)

    def add(self, line: LineItem) -> int:
        """
        Add a line, merging with an identical one.

        Returns:
            Index of the line that holds the item
        """
        if line.quantity <= 0:
            raise PricingError("Quantity must be at least 1", code="INVALID_QUANTITY")

        key = _merge_key(line)
        for index, existing in enumerate(self._lines):
            if _merge_key(existing) == key:
                existing.quantity += line.quantity
                logger.debug(
                    "Merged cart line",
                    extra={"store_id": self.store_id, "index": index, "quantity": existing.quantity},
                )
                return index

        self._lines.append(line)
        return len(self._lines) - 1

    def update_quantity(self, index: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(index)
            return
        self._lines[index].quantity = quantity

    def remove(self, index: int) -> LineItem:
        return self._lines.pop(index)

    def clear(self) -> None:
        self._lines.clear()

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def subtotal(self):
        return quantize(sum((line.total for line in self._lines), ZERO))

    def breakdown(self, discount: Discount | None = None) -> OrderBreakdown:
        return price_order(self._lines, discount)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)
