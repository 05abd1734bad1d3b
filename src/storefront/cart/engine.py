"""Cart engine — session-owned access to the shopping cart."""

from dataclasses import dataclass

from storefront.cart.cart import ShoppingCart, validate_quantity
from storefront.checkout.shipping import amount_to_free_shipping, shipping_cost_for
from storefront.shared.money import round_currency
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float


@dataclass(frozen=True)
class CartSummary:
    """Cart totals as displayed, rounded to cents."""

    lines: tuple
    total_items: int
    subtotal: float
    shipping_cost: float
    total: float
    amount_to_free_shipping: float


class CartEngine:
    """Owns the active cart for one shopping session.

    Products are resolved through the catalogue store, which the engine only
    reads from. Every mutation goes through the ShoppingCart aggregate, and
    the events it raises are logged and drained.
    """

    def __init__(self, catalogue, cart=None):
        self.catalogue = catalogue
        self.cart = cart or ShoppingCart.create()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def items(self):
        return list(self.cart.items)

    @property
    def total_items(self) -> int:
        return self.cart.total_items

    @property
    def total_price(self) -> float:
        return self.cart.total_price

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    def quantity_of(self, product_id) -> int:
        item = self.cart.find_item(product_id)
        return item.quantity if item else 0

    def summary(self) -> CartSummary:
        subtotal = self.cart.total_price
        shipping = shipping_cost_for(subtotal) if not self.cart.is_empty else 0.0
        lines = tuple(
            CartLine(
                product_id=str(item.product_id),
                product_name=item.product_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                line_total=round_currency(item.line_total),
            )
            for item in self.cart.items
        )
        return CartSummary(
            lines=lines,
            total_items=self.cart.total_items,
            subtotal=round_currency(subtotal),
            shipping_cost=shipping,
            total=round_currency(subtotal + shipping),
            amount_to_free_shipping=amount_to_free_shipping(subtotal),
        )

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, product, quantity=1):
        """Add ``quantity`` of a product, given as a Product or its id."""
        validate_quantity(quantity)
        if not hasattr(product, "product_id"):
            product = self.catalogue.get(product)

        self.cart.add_item(product, quantity)
        self._publish()

    def update_quantity(self, product_id, new_quantity):
        self.cart.update_item_quantity(product_id, new_quantity)
        self._publish()

    def remove_from_cart(self, product_id):
        self.cart.remove_item(product_id)
        self._publish()

    def clear_cart(self):
        self.cart.clear()
        self._publish()

    def _publish(self):
        events = list(self.cart._events)
        self.cart._events.clear()
        for event in events:
            logger.debug(
                "cart_changed",
                event_type=event.__class__.__name__,
                cart_id=str(self.cart.id),
                total_items=self.cart.total_items,
            )
