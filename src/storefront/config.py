"""Runtime settings for the storefront, read from environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Storefront settings.

    Every value has a default so the demo runs without any environment set.
    """

    checkout_delay: float = 2.0
    orders_page_size: int = 10
    catalogue_path: Path = field(default=DATA_DIR / "products.json")
    orders_path: Path = field(default=DATA_DIR / "orders.json")
    seed_orders: bool = True

    def __post_init__(self):
        if self.checkout_delay < 0:
            raise ValueError("checkout_delay cannot be negative")
        if self.orders_page_size < 1:
            raise ValueError("orders_page_size must be at least 1")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            checkout_delay=_env_float("STOREFRONT_CHECKOUT_DELAY", 2.0),
            orders_page_size=_env_int("STOREFRONT_ORDERS_PAGE_SIZE", 10),
            catalogue_path=Path(os.getenv("STOREFRONT_CATALOGUE_PATH") or DATA_DIR / "products.json"),
            orders_path=Path(os.getenv("STOREFRONT_ORDERS_PATH") or DATA_DIR / "orders.json"),
            seed_orders=os.getenv("STOREFRONT_SEED_ORDERS", "true").lower() in _TRUTHY,
        )
