"""Storefront-specific errors.

Input problems are reported with protean's ``ValidationError`` and failed
lookups with ``ObjectNotFoundError``; the classes below only cover the cases
those two do not name.
"""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    """Checkout was attempted with no line items in the cart."""

    def __init__(self, messages=None, **kwargs):
        super().__init__(messages or {"cart": ["Your cart is empty"]}, **kwargs)


class CheckoutInProgressError(Exception):
    """A checkout submission is already running for this session."""
