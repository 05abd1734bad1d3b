"""Storefront bounded context — catalogue, shopping cart, checkout and orders.

Products are loaded once from bundled data and never change during a session.
The cart collects line items for the active shopper, checkout turns the cart
into an Order, and the provider console queries and updates placed orders.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
