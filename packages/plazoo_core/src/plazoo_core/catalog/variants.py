"""
Product variants.

A product varies along independent axes (cor, tamanho, modelo). The
generator enumerates every combination of axis values; per-combination
fields (SKU, stock, price, image) start empty and are filled in by the
store owner, one combination at a time.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from itertools import product as cartesian
from typing import Any, Iterable, Mapping, Sequence

from plazoo_core.errors import VariantError
from plazoo_core.pricing.money import to_decimal


class VariantAxisName(str, Enum):
    """Axes a catalog product can vary along."""

    COR = "cor"
    TAMANHO = "tamanho"
    MODELO = "modelo"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, name: "str | VariantAxisName") -> "VariantAxisName":
        try:
            return cls(name.strip().lower() if isinstance(name, str) else name)
        except ValueError:
            raise VariantError(
                f"Unknown variant axis: {name!r}",
                code="UNKNOWN_AXIS",
                details={"axis": str(name), "allowed": [a.value for a in cls]},
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AxisOption:
    """One value on an axis, with an optional price adjustment and stock."""

    value: str
    price_adjustment: Decimal = Decimal("0")
    stock_quantity: int | None = None
    variant_id: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "price_adjustment", to_decimal(self.price_adjustment))


@dataclass
class Combination:
    """
    One value per axis.

    ``key`` is the ordered tuple of chosen values and is unique within a
    product. The remaining fields are entered independently per combination.
    """

    key: tuple[str, ...]
    options: dict[str, str]
    sku: str | None = None
    quantity: int | None = None
    safety_stock: int | None = None
    price: Decimal | None = None
    cost_price: Decimal | None = None
    image_url: str | None = None

    @property
    def label(self) -> str:
        return " / ".join(self.key)

    @property
    def is_low_stock(self) -> bool:
        """True when stock is at or below the safety threshold."""
        if self.quantity is None or self.safety_stock is None:
            return False
        return self.quantity <= self.safety_stock


def _option_value(option: "str | AxisOption") -> str:
    return option.value if isinstance(option, AxisOption) else str(option)


def generate_combinations(
    axes: Mapping[Any, Sequence["str | AxisOption"]],
) -> list[Combination]:
    """
    Enumerate the combination key space for a product.

    Args:
        axes: Axis name -> values, in insertion order

    Returns:
        Combinations in axis order, then value order. Empty axes are
        skipped; no non-empty axis means no combinations (simple product).
    """
    names: list[str] = []
    value_lists: list[list[str]] = []

    for axis, options in axes.items():
        values: list[str] = []
        for option in options or ():
            value = _option_value(option)
            if value not in values:
                values.append(value)
        if not values:
            continue
        names.append(str(axis))
        value_lists.append(values)

    if not names:
        return []

    return [
        Combination(key=tuple(values), options=dict(zip(names, values)))
        for values in cartesian(*value_lists)
    ]


def group_variants(rows: Iterable[Mapping[str, Any]]) -> dict[str, list[AxisOption]]:
    """
    Group variant rows by axis.

    Rows look like the backend's product_variants table:
    {id, variant_type, variant_value, price_adjustment, stock_quantity}.
    """
    grouped: dict[str, list[AxisOption]] = {}
    for row in rows:
        axis = row["variant_type"]
        grouped.setdefault(axis, []).append(
            AxisOption(
                value=row["variant_value"],
                price_adjustment=row.get("price_adjustment") or 0,
                stock_quantity=row.get("stock_quantity"),
                variant_id=row.get("id"),
            )
        )
    return grouped


@dataclass(frozen=True)
class VariantSelection:
    """A chosen value per known axis."""

    choices: Mapping[VariantAxisName, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "VariantSelection":
        choices: dict[VariantAxisName, str] = {}
        for name, value in data.items():
            if value is None or str(value) == "":
                continue
            choices[VariantAxisName.parse(name)] = str(value)
        return cls(choices=choices)

    def get(self, axis: "str | VariantAxisName") -> str | None:
        return self.choices.get(VariantAxisName.parse(axis))

    def to_dict(self) -> dict[str, str]:
        """Serialize for storage (cart_items.selected_variants)."""
        return {axis.value: value for axis, value in self.choices.items()}

    def __len__(self) -> int:
        return len(self.choices)


def missing_axes(
    options_by_axis: Mapping[str, Sequence[AxisOption]],
    selection: VariantSelection,
) -> list[VariantAxisName]:
    """Axes that have options but no chosen value."""
    missing = []
    for name, options in options_by_axis.items():
        if not options:
            continue
        axis = VariantAxisName.parse(name)
        if axis not in selection.choices:
            missing.append(axis)
    return missing


def selection_price(
    base_price,
    options_by_axis: Mapping[str, Sequence[AxisOption]],
    selection: VariantSelection,
) -> Decimal:
    """
    Base price plus the price adjustment of every chosen value.

    Raises:
        VariantError: a chosen value does not exist on its axis
    """
    price = to_decimal(base_price)
    by_axis = {VariantAxisName.parse(name): options for name, options in options_by_axis.items()}

    for axis, value in selection.choices.items():
        options = by_axis.get(axis, ())
        match = next((o for o in options if o.value == value), None)
        if match is None:
            raise VariantError(
                f"Value {value!r} is not available for {axis.label}",
                code="UNKNOWN_VALUE",
                details={"axis": axis.value, "value": value},
            )
        price += match.price_adjustment

    return price
