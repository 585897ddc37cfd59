"""
Money helpers.

Amounts are ``Decimal`` in reais. Inputs coming from forms or the backend
(floats, ints, strings) go through ``to_decimal`` so binary float error
never enters the arithmetic.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from plazoo_core.errors import PricingError

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert a number or numeric string to Decimal."""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return ZERO
    try:
        if isinstance(value, str):
            value = value.strip().replace(",", ".")
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise PricingError(f"Invalid amount: {value!r}", code="INVALID_AMOUNT")


def quantize(amount) -> Decimal:
    """Round to cents, half up."""
    return to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_brl(amount) -> str:
    """
    Format an amount for display.

    1234.5 -> "R$ 1.234,50"
    """
    value = quantize(amount)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}"  # 1,234.50
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {grouped}"
