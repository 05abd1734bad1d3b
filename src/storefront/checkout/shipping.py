"""Shipping cost rule applied at checkout."""

from storefront.shared.money import round_currency

FREE_SHIPPING_THRESHOLD = 75.00
SHIPPING_COST = 9.99


def shipping_cost_for(subtotal: float) -> float:
    """Flat shipping fee, waived once the subtotal reaches the free-shipping threshold.

    The subtotal is compared at cent precision so that float noise from
    summing prices cannot push 75.00 below the threshold.
    """
    if round_currency(subtotal) >= FREE_SHIPPING_THRESHOLD:
        return 0.0
    return SHIPPING_COST


def amount_to_free_shipping(subtotal: float) -> float:
    """How much more the shopper has to add to qualify for free shipping."""
    return max(round_currency(FREE_SHIPPING_THRESHOLD - round_currency(subtotal)), 0.0)
