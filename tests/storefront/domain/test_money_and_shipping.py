"""Tests for currency helpers and the shipping rule."""

import pytest
from storefront.checkout.shipping import (
    FREE_SHIPPING_THRESHOLD,
    SHIPPING_COST,
    amount_to_free_shipping,
    shipping_cost_for,
)
from storefront.shared.money import format_price, round_currency


class TestRoundCurrency:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (1.005, 1.01),
            (2.675, 2.68),
            (19.99 * 3, 59.97),
            (0.1 + 0.2, 0.3),
            (10, 10.0),
        ],
    )
    def test_rounds_half_up_to_cents(self, amount, expected):
        assert round_currency(amount) == expected


class TestFormatPrice:
    def test_two_decimals(self):
        assert format_price(19.9) == "$19.90"

    def test_thousands_separator(self):
        assert format_price(1234.5) == "$1,234.50"

    def test_zero(self):
        assert format_price(0) == "$0.00"


class TestShippingRule:
    def test_constants(self):
        assert FREE_SHIPPING_THRESHOLD == 75.00
        assert SHIPPING_COST == 9.99

    def test_free_at_threshold(self):
        assert shipping_cost_for(75.00) == 0.0

    def test_charged_just_below_threshold(self):
        assert shipping_cost_for(74.99) == 9.99

    def test_free_above_threshold(self):
        assert shipping_cost_for(120.0) == 0.0

    def test_float_noise_does_not_cost_shipping(self):
        subtotal = 25.0 + 24.99 + 25.01
        assert shipping_cost_for(subtotal) == 0.0

    def test_amount_to_free_shipping(self):
        assert amount_to_free_shipping(60.0) == 15.0
        assert amount_to_free_shipping(74.99) == 0.01
        assert amount_to_free_shipping(80.0) == 0.0
