"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A shopper completed checkout and a new order was created."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_email = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    shipping_cost = Float(required=True)
    grand_total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The provider moved an order to another status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
