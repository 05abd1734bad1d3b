"""FastAPI application factory for the storefront.

The domain must be initialized (``storefront.init()``) before the app
serves requests; see ``src/app.py``.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.api.routes import cart_router, checkout_router, order_router, product_router
from storefront.domain import storefront
from storefront.shared.errors import CheckoutInProgressError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(session=None) -> FastAPI:
    """Build the API around a ``Storefront`` session.

    When no session is given one is created from the environment settings.
    """
    if session is None:
        from storefront.session import Storefront

        with storefront.domain_context():
            session = Storefront.create()

    app = FastAPI(
        title="Storefront API",
        description="Supplement storefront — catalogue, cart, checkout and order management",
    )
    app.state.storefront = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            response = await call_next(request)
        return response

    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)

    register_exception_handlers(app)

    @app.exception_handler(CheckoutInProgressError)
    async def checkout_in_progress(request: Request, exc: CheckoutInProgressError):
        logger.warning("checkout_rejected", reason=str(exc))
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": {"name": storefront.name},
                "products": len(session.catalogue),
                "orders": len(session.orders),
            }
        )

    return app
