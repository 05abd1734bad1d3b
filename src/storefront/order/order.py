"""Order aggregate — a placed order and its frozen snapshot of the cart.

Line items and pricing are copied at checkout and never recomputed, so later
catalogue changes cannot alter a placed order. Subtotal and shipping are kept
as separate amounts alongside the grand total.

Status changes are deliberately permissive: any status may follow any other.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.contact import is_valid_email
from storefront.shared.money import CURRENCY, round_currency


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


def parse_status(value):
    """Return the OrderStatus for ``value`` or raise ``ValidationError``."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Unknown order status `{value}`; expected one of {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Customer:
    """Contact details of the shopper, captured once at checkout."""

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=20)

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order is shipped, as entered at checkout."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=10)
    country = String(max_length=100, default="USA")


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Amounts frozen at checkout: item subtotal, shipping and the grand total."""

    subtotal = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    grand_total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default=CURRENCY)

    @invariant.post
    def grand_total_must_add_up(self):
        if abs(round_currency(self.subtotal + self.shipping_cost) - self.grand_total) > 0.005:
            raise ValidationError(
                {
                    "grand_total": [
                        f"Grand total {self.grand_total} does not equal subtotal {self.subtotal} "
                        f"plus shipping {self.shipping_cost}"
                    ]
                }
            )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A copy of a cart line at the moment the order was placed."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    category = String(max_length=50)
    image = String(max_length=500)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_id = Identifier(identifier=True, required=True)
    customer = ValueObject(Customer, required=True)
    shipping_address = ValueObject(ShippingAddress, required=True)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing, required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    order_date = DateTime(required=True)
    shipping_date = DateTime()
    delivery_date = DateTime()
    tracking_number = String(max_length=255)
    notes = Text()

    @invariant.post
    def subtotal_must_match_items(self):
        if not self.items or self.pricing is None:
            return

        items_total = round_currency(sum(item.unit_price * item.quantity for item in self.items))
        if abs(items_total - self.pricing.subtotal) > 0.005:
            raise ValidationError(
                {"pricing": [f"Subtotal {self.pricing.subtotal} does not match the items total {items_total}"]}
            )

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_id, customer, shipping_address, lines, shipping_cost, placed_at=None):
        """Create a pending order from checkout data.

        Args:
            order_id: Identifier generated for the new order.
            customer: Customer value object.
            shipping_address: ShippingAddress value object.
            lines: Iterable of dicts with product_id, product_name, category,
                   image, unit_price and quantity.
            shipping_cost: Shipping charged for this order.
            placed_at: Order timestamp, defaults to now (UTC).
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        placed_at = _as_utc(placed_at) if placed_at else datetime.now(UTC)
        subtotal = round_currency(sum(line["unit_price"] * line["quantity"] for line in lines))
        pricing = OrderPricing(
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            grand_total=round_currency(subtotal + shipping_cost),
        )

        order = cls._assemble(
            order_id=order_id,
            customer=customer,
            shipping_address=shipping_address,
            lines=lines,
            pricing=pricing,
            status=OrderStatus.PENDING.value,
            order_date=placed_at,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.order_id),
                customer_email=customer.email,
                item_count=len(lines),
                subtotal=pricing.subtotal,
                shipping_cost=pricing.shipping_cost,
                grand_total=pricing.grand_total,
                placed_at=placed_at,
            )
        )
        return order

    @classmethod
    def from_record(cls, record):
        """Rebuild a historical order from a bundled data record (camelCase keys)."""
        customer_data = record["customer"]
        address_data = customer_data.get("address", {})
        lines = [
            {
                "product_id": item["productId"],
                "product_name": item["productName"],
                "category": item.get("category"),
                "image": item.get("image"),
                "unit_price": item["price"],
                "quantity": item["quantity"],
            }
            for item in record["items"]
        ]

        return cls._assemble(
            order_id=record["id"],
            customer=Customer(
                first_name=customer_data["firstName"],
                last_name=customer_data["lastName"],
                email=customer_data["email"],
                phone=customer_data["phone"],
            ),
            shipping_address=ShippingAddress(
                street=address_data["street"],
                city=address_data["city"],
                state=address_data["state"],
                zip_code=address_data["zipCode"],
                country=address_data.get("country", "USA"),
            ),
            lines=lines,
            pricing=OrderPricing(
                subtotal=record["subtotal"],
                shipping_cost=record.get("shippingCost", 0.0),
                grand_total=record["totalAmount"],
            ),
            status=parse_status(record.get("status", OrderStatus.PENDING.value)).value,
            order_date=_parse_timestamp(record["orderDate"]),
            shipping_date=_parse_timestamp(record.get("shippingDate")),
            delivery_date=_parse_timestamp(record.get("deliveryDate")),
            tracking_number=record.get("trackingNumber"),
            notes=record.get("notes"),
        )

    @classmethod
    def _assemble(cls, lines, **attributes):
        order = cls(**attributes)
        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderItem(
                        product_id=line["product_id"],
                        product_name=line["product_name"],
                        category=line.get("category"),
                        image=line.get("image"),
                        unit_price=line["unit_price"],
                        quantity=line["quantity"],
                    )
                )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total_amount(self):
        return self.pricing.grand_total

    @property
    def subtotal(self):
        return self.pricing.subtotal

    @property
    def shipping_cost(self):
        return self.pricing.shipping_cost

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Status lifecycle
    # -------------------------------------------------------------------
    def update_status(self, new_status, changed_at=None):
        """Move the order to ``new_status``; every transition is allowed.

        Shipping and delivery dates are stamped the first time the order
        enters ``shipped`` or ``delivered``.
        """
        target = parse_status(new_status)
        previous = OrderStatus(self.status)
        if target == previous:
            return

        changed_at = _as_utc(changed_at) if changed_at else datetime.now(UTC)

        self.status = target.value
        if target == OrderStatus.SHIPPED and self.shipping_date is None:
            self.shipping_date = changed_at
        if target == OrderStatus.DELIVERED and self.delivery_date is None:
            self.delivery_date = changed_at

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.order_id),
                previous_status=previous.value,
                new_status=target.value,
                changed_at=changed_at,
            )
        )


def _as_utc(timestamp):
    """Naive timestamps are taken to be UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp


def _parse_timestamp(value):
    if not value:
        return None
    return _as_utc(datetime.fromisoformat(value))
