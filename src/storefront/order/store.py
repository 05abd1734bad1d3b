"""Order store — the session's placed orders, most recent first."""

import json
import secrets
import string
import time
from pathlib import Path

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_order_id(now_ms: int | None = None) -> str:
    """Return an id shaped like ``ORD-<base36 ms timestamp>-<6 random chars>``."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"ORD-{_to_base36(now_ms)}-{suffix}"


class OrderStore:
    """Keeps placed orders in memory, newest first, indexed by order id.

    Orders are only ever added or have their status changed; nothing is
    deleted during a session.
    """

    def __init__(self, orders=()):
        self._orders = []
        self._by_id = {}
        for order in orders:
            self._append(order)

    @classmethod
    def from_records(cls, records):
        return cls(Order.from_record(record) for record in records)

    @classmethod
    def load(cls, path: Path) -> "OrderStore":
        """Load seed orders from a JSON file; records are expected newest first."""
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)

        store = cls.from_records(records)
        logger.info("orders_loaded", path=str(path), order_count=len(store))
        return store

    def _append(self, order):
        order_id = str(order.order_id)
        if order_id in self._by_id:
            raise ValidationError({"order_id": [f"Order `{order_id}` already exists"]})
        self._orders.append(order)
        self._by_id[order_id] = order

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def orders(self) -> tuple:
        return tuple(self._orders)

    def get_order_by_id(self, order_id) -> Order:
        try:
            return self._by_id[str(order_id)]
        except KeyError:
            raise ObjectNotFoundError({"order_id": [f"Order `{order_id}` does not exist"]}) from None

    def next_order_id(self) -> str:
        """Generate an order id not yet used in this store."""
        order_id = generate_order_id()
        while order_id in self._by_id:
            order_id = generate_order_id()
        return order_id

    def __len__(self):
        return len(self._orders)

    def __iter__(self):
        return iter(self._orders)

    def __contains__(self, order_id):
        return str(order_id) in self._by_id

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_order(self, order: Order) -> Order:
        """Insert a new order at the front of the store."""
        order_id = str(order.order_id)
        if order_id in self._by_id:
            raise ValidationError({"order_id": [f"Order `{order_id}` already exists"]})

        self._orders.insert(0, order)
        self._by_id[order_id] = order
        self._publish(order)
        return order

    def update_order_status(self, order_id, new_status) -> Order:
        """Set the status of an existing order; any transition is accepted."""
        order = self.get_order_by_id(order_id)
        order.update_status(new_status)
        self._publish(order)
        return order

    def _publish(self, order):
        events = list(order._events)
        order._events.clear()
        for event in events:
            if isinstance(event, OrderPlaced):
                logger.info(
                    "order_placed",
                    order_id=event.order_id,
                    item_count=event.item_count,
                    grand_total=event.grand_total,
                )
            elif isinstance(event, OrderStatusChanged):
                logger.info(
                    "order_status_changed",
                    order_id=event.order_id,
                    previous_status=event.previous_status,
                    new_status=event.new_status,
                )
