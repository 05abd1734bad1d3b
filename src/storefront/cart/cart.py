"""Shopping Cart aggregate — the shopper's line items for the current session.

A product appears at most once in the cart; adding it again increases the
quantity of the existing line. Totals are derived from the lines on every
read, so they can never drift from the items they summarise.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


def validate_quantity(quantity):
    """Quantities are whole numbers of at least one."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a whole number of at least 1"]})


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self):
        return self.unit_price * self.quantity


@storefront.aggregate
class ShoppingCart:
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_must_appear_once(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can only appear once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self):
        return sum(item.unit_price * item.quantity for item in self.items)

    @property
    def is_empty(self):
        return not self.items

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        """Add a product to the cart (or increase its quantity if already present)."""
        validate_quantity(quantity)

        existing = self.find_item(product.product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product.product_id,
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=quantity,
                    added_at=now,
                )
            )
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_item_quantity(self, product_id, new_quantity):
        """Set a line's quantity; zero or less removes the line.

        Unknown products are ignored.
        """
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
            raise ValidationError({"quantity": ["Quantity must be a whole number"]})

        item = self.find_item(product_id)
        if item is None:
            return

        if new_quantity <= 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove a product's line from the cart. Unknown products are ignored."""
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Remove every line from the cart."""
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                items_removed=removed,
            )
        )
