"""
Price computation for carts and orders.

Line discounts apply to the unit price before multiplying by quantity (a
clerk discounting one item at the counter). The order discount applies to
the subtotal of lines already net of their own discounts. Totals are
floored at zero.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from plazoo_core.errors import PricingError
from plazoo_core.pricing.money import ZERO, quantize, to_decimal

HUNDRED = Decimal("100")


class DiscountType(str, Enum):
    """How a discount value is interpreted."""

    PERCENT = "percent"
    FIXED = "fixed"

    @classmethod
    def parse(cls, value: "str | DiscountType") -> "DiscountType":
        try:
            return cls(value)
        except ValueError:
            raise PricingError(
                f"Unknown discount type: {value!r}",
                code="UNKNOWN_DISCOUNT_TYPE",
            )

    def __str__(self) -> str:
        return self.value


def clamp_discount(value, discount_type: "str | DiscountType" = DiscountType.PERCENT) -> Decimal:
    """Clamp raw user input: negatives become 0, percentages cap at 100."""
    amount = to_decimal(value)
    if amount < 0:
        return ZERO
    if DiscountType.parse(discount_type) == DiscountType.PERCENT and amount > HUNDRED:
        return HUNDRED
    return amount


def apply_discount(amount, discount, discount_type: "str | DiscountType" = DiscountType.PERCENT) -> Decimal:
    """
    Reduce an amount by a discount.

    percent: amount * (1 - discount / 100)
    fixed:   amount - discount

    The result never goes below zero.

    Raises:
        PricingError: negative discount (clamp user input first)
    """
    amount = to_decimal(amount)
    discount = to_decimal(discount)
    if discount < 0:
        raise PricingError(
            f"Discount must not be negative: {discount}",
            code="NEGATIVE_DISCOUNT",
        )

    if DiscountType.parse(discount_type) == DiscountType.PERCENT:
        result = amount * (1 - discount / HUNDRED)
    else:
        result = amount - discount

    return quantize(max(ZERO, result))


@dataclass(frozen=True)
class Discount:
    value: Decimal = ZERO
    type: DiscountType = DiscountType.PERCENT

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))
        object.__setattr__(self, "type", DiscountType.parse(self.type))

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def apply(self, amount) -> Decimal:
        return apply_discount(amount, self.value, self.type)


@dataclass(frozen=True)
class AddOn:
    """A selected extra with its own quantity (per unit of the line)."""

    price: Decimal
    quantity: int = 1
    name: str | None = None
    addon_id: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "price", to_decimal(self.price))
        if self.quantity < 0:
            raise PricingError("Add-on quantity must not be negative", code="INVALID_QUANTITY")

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity


def _as_add_on(value: Any) -> AddOn:
    if isinstance(value, AddOn):
        return value
    if isinstance(value, Mapping):
        return AddOn(
            price=value["price"],
            quantity=int(value.get("quantity", 1)),
            name=value.get("name"),
            addon_id=value.get("id"),
        )
    price, quantity = value
    return AddOn(price=price, quantity=int(quantity))


def _coerce_discount(discount, discount_type) -> Discount | None:
    if discount is None:
        return None
    if isinstance(discount, Discount):
        return discount
    return Discount(value=discount, type=discount_type)


def unit_price(base_price, size_adjustment=None, add_ons: Iterable[Any] = ()) -> Decimal:
    """base + size adjustment + sum(add-on price * add-on quantity)."""
    price = to_decimal(base_price) + to_decimal(size_adjustment)
    for add_on in add_ons:
        price += _as_add_on(add_on).total
    return price


def line_total(
    base_price,
    size_adjustment=None,
    add_ons: Iterable[Any] = (),
    quantity: int = 1,
    discount=None,
    discount_type: "str | DiscountType" = DiscountType.PERCENT,
) -> Decimal:
    """
    Total for one cart line.

    Args:
        base_price: Product or menu item price
        size_adjustment: Selected size's price adjustment (default 0)
        add_ons: AddOn objects, {price, quantity} mappings or (price, quantity) pairs
        quantity: Units on the line
        discount: Optional line discount, applied to the unit price
        discount_type: "percent" or "fixed"
    """
    if quantity < 0:
        raise PricingError("Quantity must not be negative", code="INVALID_QUANTITY")

    unit = unit_price(base_price, size_adjustment, add_ons)
    line_discount = _coerce_discount(discount, discount_type)
    if line_discount is not None:
        unit = line_discount.apply(unit)

    return quantize(max(ZERO, unit * quantity))


@dataclass
class LineItem:
    """A cart or order line."""

    base_price: Decimal
    quantity: int = 1
    size_adjustment: Decimal = ZERO
    add_ons: Sequence[AddOn] = field(default_factory=tuple)
    discount: Discount | None = None
    product_id: str | None = None
    menu_item_id: str | None = None
    variant_id: str | None = None
    size_id: str | None = None
    selected_variants: Mapping[str, str] = field(default_factory=dict)
    name: str | None = None
    notes: str | None = None

    def __post_init__(self):
        self.base_price = to_decimal(self.base_price)
        self.size_adjustment = to_decimal(self.size_adjustment)
        self.add_ons = tuple(_as_add_on(a) for a in self.add_ons)

    @property
    def unit_price(self) -> Decimal:
        """Base price plus size adjustment (add-ons excluded)."""
        return self.base_price + self.size_adjustment

    @property
    def extras_total(self) -> Decimal:
        """Add-ons per unit."""
        return sum((a.total for a in self.add_ons), ZERO)

    @property
    def total(self) -> Decimal:
        return line_total(
            self.base_price,
            self.size_adjustment,
            self.add_ons,
            self.quantity,
            discount=self.discount,
        )


def _line_amount(line: Any) -> Decimal:
    if isinstance(line, LineItem):
        return line.total
    return to_decimal(line)


def order_total(
    lines: Iterable[Any],
    order_discount=ZERO,
    order_discount_type: "str | DiscountType" = DiscountType.PERCENT,
) -> Decimal:
    """
    Total for an order.

    Args:
        lines: LineItem objects or line totals already net of line discounts
        order_discount: Discount on the subtotal
        order_discount_type: "percent" or "fixed"
    """
    subtotal = sum((_line_amount(line) for line in lines), ZERO)
    return apply_discount(subtotal, order_discount or ZERO, order_discount_type)


@dataclass(frozen=True)
class LineBreakdown:
    line: LineItem
    gross: Decimal  # unit price with add-ons, times quantity, before discount
    total: Decimal

    @property
    def discount_amount(self) -> Decimal:
        return self.gross - self.total


@dataclass(frozen=True)
class OrderBreakdown:
    """Priced order, handed to the order writer."""

    lines: tuple[LineBreakdown, ...]
    subtotal: Decimal
    discount: Discount | None
    discount_amount: Decimal
    total: Decimal

    @property
    def line_discount_total(self) -> Decimal:
        return sum((b.discount_amount for b in self.lines), ZERO)


def price_order(lines: Iterable[LineItem], discount: Discount | None = None) -> OrderBreakdown:
    """Price every line, then the order discount over the subtotal."""
    breakdowns = []
    for line in lines:
        gross = quantize(unit_price(line.base_price, line.size_adjustment, line.add_ons) * line.quantity)
        breakdowns.append(LineBreakdown(line=line, gross=gross, total=line.total))

    subtotal = sum((b.total for b in breakdowns), ZERO)
    total = discount.apply(subtotal) if discount is not None else quantize(subtotal)

    return OrderBreakdown(
        lines=tuple(breakdowns),
        subtotal=quantize(subtotal),
        discount=discount,
        discount_amount=quantize(subtotal) - total,
        total=total,
    )
