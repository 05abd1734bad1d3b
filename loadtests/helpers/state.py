"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. The server itself runs a
single storefront session, so the cart is shared by every simulated shopper.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks what a simulated shopper has seen and bought."""

    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)


@dataclass
class ProviderState:
    """Tracks the order ids a simulated provider has browsed."""

    order_ids: list[str] = field(default_factory=list)
    total_pages: int = 0
