"""Order placement — turns the session's cart into a pending order.

``place_order`` does the whole placement in one synchronous step: nothing is
created if any check fails, and the cart is cleared only once the order is in
the store. ``Checkout`` wraps it with the simulated submission delay and
refuses a second submission while one is running.
"""

import asyncio
from datetime import UTC, datetime

from storefront.checkout.shipping import shipping_cost_for
from storefront.checkout.validation import validate_checkout_form
from storefront.order.order import Order
from storefront.shared.errors import CheckoutInProgressError, EmptyCartError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _snapshot_lines(cart):
    """Copy the cart lines, with the catalogue details an order keeps for display."""
    lines = []
    for item in cart.items:
        product = cart.catalogue.get(item.product_id) if item.product_id in cart.catalogue else None
        lines.append(
            {
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "category": product.category if product else None,
                "image": product.image if product else None,
                "unit_price": item.unit_price,
                "quantity": item.quantity,
            }
        )
    return lines


def place_order(cart, orders, form, now=None):
    """Place an order for everything in ``cart``.

    Args:
        cart: The session's ``CartEngine``.
        orders: The ``OrderStore`` receiving the order.
        form: Checkout details, a ``CheckoutForm`` or a mapping.
        now: Order timestamp, defaults to the current time (UTC).

    Returns:
        The new pending ``Order``.

    Raises:
        ValidationError: when the form has invalid fields.
        EmptyCartError: when the cart has no items.
    """
    customer, address = validate_checkout_form(form)
    if cart.is_empty:
        raise EmptyCartError()

    subtotal = cart.total_price
    order = Order.place(
        order_id=orders.next_order_id(),
        customer=customer,
        shipping_address=address,
        lines=_snapshot_lines(cart),
        shipping_cost=shipping_cost_for(subtotal),
        placed_at=now or datetime.now(UTC),
    )

    orders.add_order(order)
    cart.clear_cart()
    return order


class Checkout:
    """Checkout submission for one session.

    ``submit`` validates up front, waits out the simulated network delay and
    then places the order. The wait cannot be cancelled and always ends in a
    placed order, as long as the form and cart are still valid.
    """

    def __init__(self, cart, orders, delay=2.0):
        self.cart = cart
        self.orders = orders
        self.delay = delay
        self._submitting = False

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    async def submit(self, form):
        if self._submitting:
            raise CheckoutInProgressError("A checkout submission is already in progress")

        validate_checkout_form(form)
        if self.cart.is_empty:
            raise EmptyCartError()

        self._submitting = True
        try:
            logger.debug("checkout_submitted", delay=self.delay, total_items=self.cart.total_items)
            await asyncio.sleep(self.delay)
            return place_order(self.cart, self.orders, form)
        finally:
            self._submitting = False
