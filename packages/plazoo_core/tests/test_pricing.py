"""
Tests for the pricing engine and money helpers.
"""

from decimal import Decimal

import pytest

from plazoo_core.errors import PricingError
from plazoo_core.pricing.engine import (
    AddOn,
    Discount,
    DiscountType,
    LineItem,
    apply_discount,
    clamp_discount,
    line_total,
    order_total,
    price_order,
    unit_price,
)
from plazoo_core.pricing.money import format_brl, quantize, to_decimal


class TestMoney:
    """Tests for Decimal conversion and formatting."""

    def test_to_decimal_from_float_has_no_binary_error(self):
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_to_decimal_accepts_comma(self):
        assert to_decimal("12,50") == Decimal("12.50")

    def test_to_decimal_empty(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("") == Decimal("0")

    def test_to_decimal_invalid(self):
        with pytest.raises(PricingError) as exc_info:
            to_decimal("doze reais")
        assert exc_info.value.code == "INVALID_AMOUNT"

    def test_quantize_rounds_half_up(self):
        assert quantize("10.005") == Decimal("10.01")
        assert quantize("10.004") == Decimal("10.00")

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1234.5, "R$ 1.234,50"),
            (0, "R$ 0,00"),
            ("1000000", "R$ 1.000.000,00"),
            (-5, "-R$ 5,00"),
        ],
    )
    def test_format_brl(self, amount, expected):
        assert format_brl(amount) == expected


class TestDiscounts:
    """Tests for discount application."""

    def test_percent(self):
        assert apply_discount(100, 10) == Decimal("90.00")

    def test_percent_of_200(self):
        assert apply_discount(200, 10, DiscountType.PERCENT) == Decimal("180")
        assert apply_discount(200, 250, DiscountType.FIXED) == Decimal("0")

    def test_fixed(self):
        assert apply_discount(100, 15, "fixed") == Decimal("85.00")

    def test_result_is_rounded_to_cents(self):
        assert apply_discount("19.99", 15) == Decimal("16.99")

    def test_fixed_larger_than_amount_floors_at_zero(self):
        assert apply_discount(10, 25, DiscountType.FIXED) == Decimal("0.00")

    def test_percent_over_100_floors_at_zero(self):
        assert apply_discount(10, 150) == Decimal("0.00")

    def test_zero_discount(self):
        assert apply_discount("42.5", 0) == Decimal("42.50")

    def test_negative_discount_raises(self):
        with pytest.raises(PricingError) as exc_info:
            apply_discount(100, -5)
        assert exc_info.value.code == "NEGATIVE_DISCOUNT"

    def test_unknown_type_raises(self):
        with pytest.raises(PricingError) as exc_info:
            apply_discount(100, 5, "bogo")
        assert exc_info.value.code == "UNKNOWN_DISCOUNT_TYPE"

    def test_clamp_discount(self):
        assert clamp_discount(-5) == Decimal("0")
        assert clamp_discount(150) == Decimal("100")
        assert clamp_discount(150, "fixed") == Decimal("150")
        assert clamp_discount("12,5") == Decimal("12.5")

    def test_discount_value_object(self):
        discount = Discount("10", "percent")

        assert discount.type == DiscountType.PERCENT
        assert discount.value == Decimal("10")
        assert discount.apply(50) == Decimal("45.00")
        assert Discount().is_zero is True


class TestLineTotal:
    """Tests for cart line totals."""

    def test_base_price_only(self):
        assert line_total("29.90", quantity=2) == Decimal("59.80")

    def test_size_and_add_ons(self):
        # (10 + 2 + 1.50 * 2) * 3
        total = line_total(10, size_adjustment=2, add_ons=[(1.5, 2)], quantity=3)
        assert total == Decimal("45.00")

    def test_add_on_mappings(self):
        add_ons = [{"id": "a1", "name": "Bacon", "price": "4.00", "quantity": 2}, {"price": "1.00"}]
        assert unit_price("20", add_ons=add_ons) == Decimal("29.00")

    def test_discount_applies_to_unit_price(self):
        # unit 15.00 -> 13.50, times 3
        total = line_total(10, size_adjustment=2, add_ons=[AddOn("1.5", 2)], quantity=3, discount=10)
        assert total == Decimal("40.50")

    def test_fixed_discount_is_per_unit(self):
        assert line_total(10, quantity=2, discount=3, discount_type="fixed") == Decimal("14.00")

    def test_fixed_discount_over_unit_price(self):
        assert line_total(10, quantity=2, discount=20, discount_type="fixed") == Decimal("0.00")

    def test_hundred_plus_size_plus_add_ons(self):
        assert line_total(100, 10, [(5, 2)], 3) == Decimal("360")

    def test_zero_quantity(self):
        assert line_total(10, quantity=0) == Decimal("0.00")

    def test_negative_quantity_raises(self):
        with pytest.raises(PricingError):
            line_total(10, quantity=-1)

    def test_negative_add_on_quantity_raises(self):
        with pytest.raises(PricingError):
            AddOn("1.00", quantity=-1)


class TestLineItem:
    def test_properties(self):
        line = LineItem(
            base_price="30",
            quantity=2,
            size_adjustment="5",
            add_ons=[AddOn("2.50", 2, name="Queijo extra")],
        )

        assert line.unit_price == Decimal("35")
        assert line.extras_total == Decimal("5.00")
        assert line.total == Decimal("80.00")

    def test_line_discount(self):
        line = LineItem(base_price="100", discount=Discount(20))
        assert line.total == Decimal("80.00")


class TestOrderTotal:
    """Tests for order totals and breakdowns."""

    def test_sums_line_totals(self):
        assert order_total([Decimal("40.50"), 10]) == Decimal("50.50")

    def test_order_percent_discount(self):
        assert order_total([Decimal("40.50"), 10], 10) == Decimal("45.45")

    def test_order_fixed_discount_floors_at_zero(self):
        assert order_total([5, 5], 50, "fixed") == Decimal("0.00")

    def test_accepts_line_items(self):
        lines = [LineItem("10", quantity=2), LineItem("5.25")]
        assert order_total(lines) == Decimal("25.25")

    def test_float_inputs_sum_exactly(self):
        assert order_total([0.1, 0.2]) == Decimal("0.30")

    def test_empty_order(self):
        assert order_total([]) == Decimal("0.00")

    def test_line_discount_then_order_discount(self):
        lines = [
            LineItem("10", quantity=2, discount=Discount(10)),
            LineItem("8", add_ons=[AddOn("1", 2)]),
        ]

        breakdown = price_order(lines, Discount(5, "fixed"))

        assert breakdown.lines[0].gross == Decimal("20.00")
        assert breakdown.lines[0].total == Decimal("18.00")
        assert breakdown.lines[0].discount_amount == Decimal("2.00")
        assert breakdown.line_discount_total == Decimal("2.00")
        assert breakdown.subtotal == Decimal("28.00")
        assert breakdown.discount_amount == Decimal("5.00")
        assert breakdown.total == Decimal("23.00")

    def test_breakdown_without_discount(self):
        breakdown = price_order([LineItem("9.99", quantity=3)])

        assert breakdown.discount is None
        assert breakdown.discount_amount == Decimal("0.00")
        assert breakdown.total == Decimal("29.97")
