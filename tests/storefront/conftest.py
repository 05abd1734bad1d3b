import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """The bundled catalogue: 12 products, 5 of them best sellers."""
    from storefront.catalogue.store import CatalogueStore
    from storefront.config import DATA_DIR

    return CatalogueStore.load(DATA_DIR / "products.json")


@pytest.fixture()
def seeded_orders():
    """The bundled order history: 12 orders, newest first."""
    from storefront.config import DATA_DIR
    from storefront.order.store import OrderStore

    return OrderStore.load(DATA_DIR / "orders.json")


@pytest.fixture()
def cart(catalogue):
    from storefront.cart.engine import CartEngine

    return CartEngine(catalogue)


@pytest.fixture()
def checkout_form():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "(555) 123-4567",
        "street": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
    }


@pytest.fixture()
def make_order():
    """Factory for placed orders with a single line item."""
    from datetime import UTC, datetime

    from storefront.order.order import Customer, Order, ShippingAddress

    def _make(order_id, placed_at=None, unit_price=10.0, quantity=1, status="pending", **details):
        order = Order.place(
            order_id=order_id,
            customer=Customer(
                first_name=details.get("first_name", "Test"),
                last_name=details.get("last_name", "Shopper"),
                email=details.get("email", "shopper@example.com"),
                phone=details.get("phone", "555-123-4567"),
            ),
            shipping_address=ShippingAddress(street="1 Test St", city="Testville", state="TS", zip_code="12345"),
            lines=[
                {
                    "product_id": "1",
                    "product_name": details.get("product_name", "Vitamin D3 5000 IU"),
                    "unit_price": unit_price,
                    "quantity": quantity,
                }
            ],
            shipping_cost=0.0,
            placed_at=placed_at or datetime(2025, 1, 1, tzinfo=UTC),
        )
        if status != "pending":
            order.update_status(status)
        order._events.clear()
        return order

    return _make
