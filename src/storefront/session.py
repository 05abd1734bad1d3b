"""Storefront session — wires the stores and engines for one shopper/provider session."""

from storefront.cart.engine import CartEngine
from storefront.catalogue.store import CatalogueStore
from storefront.checkout.placement import Checkout
from storefront.config import Settings
from storefront.order.query import OrderBrowser
from storefront.order.store import OrderStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Storefront:
    """Holds every store and engine of a session and passes them to each other.

    Nothing here is global: two ``Storefront`` instances share no state.
    """

    def __init__(self, catalogue, orders, settings=None):
        self.settings = settings or Settings()
        self.catalogue = catalogue
        self.orders = orders
        self.cart = CartEngine(catalogue)
        self.checkout = Checkout(self.cart, self.orders, delay=self.settings.checkout_delay)
        self.order_browser = OrderBrowser(self.orders, page_size=self.settings.orders_page_size)

    @classmethod
    def create(cls, settings=None) -> "Storefront":
        """Load the bundled catalogue (and seed orders, when enabled) into a new session."""
        settings = settings or Settings.from_env()
        catalogue = CatalogueStore.load(settings.catalogue_path)
        orders = OrderStore.load(settings.orders_path) if settings.seed_orders else OrderStore()

        logger.info(
            "storefront_session_created",
            product_count=len(catalogue),
            order_count=len(orders),
        )
        return cls(catalogue, orders, settings)
