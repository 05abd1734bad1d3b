"""Currency helpers for display and for freezing amounts onto orders.

Amounts are carried as floats while they are being aggregated and are only
rounded to cents when shown or when written onto an Order.
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "USD"

_CENT = Decimal("0.01")


def round_currency(amount: float) -> float:
    """Round an amount to cents, halves away from zero."""
    return float(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP))


def format_price(amount: float) -> str:
    """Render an amount the way the storefront shows prices, e.g. ``$1,234.50``."""
    rounded = Decimal(str(round_currency(amount))).quantize(_CENT)
    return f"${rounded:,.2f}"
