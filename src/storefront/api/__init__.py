"""Storefront API package."""

from storefront.api.application import create_app
from storefront.api.routes import cart_router, checkout_router, order_router, product_router

__all__ = ["create_app", "product_router", "cart_router", "checkout_router", "order_router"]
