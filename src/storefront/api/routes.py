"""FastAPI routes for the storefront — catalogue, cart, checkout and orders.

Every route works on the ``Storefront`` session kept on ``app.state``.
"""

from datetime import date

from fastapi import APIRouter, Request

from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CheckoutRequest,
    DashboardStatsResponse,
    OrderIdResponse,
    OrderPageResponse,
    OrderSchema,
    ProductDetailSchema,
    ProductListResponse,
    ProductSummarySchema,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from storefront.catalogue.product import ALL_CATEGORIES
from storefront.catalogue.query import ProductFilter, ProductSort, query_products
from storefront.checkout.validation import CheckoutForm
from storefront.order.query import ALL_STATUSES, OrderFilter, OrderSort, query_orders
from storefront.order.stats import dashboard_stats


def _session(request: Request):
    return request.app.state.storefront


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    request: Request,
    search: str = "",
    category: str = ALL_CATEGORIES,
    min_price: float = 0.0,
    max_price: float | None = None,
    best_sellers_only: bool = False,
    sort_by: str = ProductSort.NAME.value,
) -> ProductListResponse:
    catalogue = _session(request).catalogue
    product_filter = ProductFilter(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        best_sellers_only=best_sellers_only,
        sort_by=sort_by,
    )
    products = query_products(catalogue.products, product_filter)
    return ProductListResponse(
        products=[ProductSummarySchema.from_product(p) for p in products],
        count=len(products),
        categories=catalogue.categories,
        max_price=catalogue.max_price,
    )


@product_router.get("/best-sellers", response_model=list[ProductSummarySchema])
async def list_best_sellers(request: Request, limit: int = 4) -> list[ProductSummarySchema]:
    products = _session(request).catalogue.best_sellers(limit)
    return [ProductSummarySchema.from_product(p) for p in products]


@product_router.get("/{product_id}", response_model=ProductDetailSchema)
async def get_product(product_id: str, request: Request) -> ProductDetailSchema:
    product = _session(request).catalogue.get(product_id)
    return ProductDetailSchema.from_product(product)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(request: Request) -> CartResponse:
    return CartResponse.from_summary(_session(request).cart.summary())


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, request: Request) -> CartResponse:
    cart = _session(request).cart
    cart.add_to_cart(body.product_id, body.quantity)
    return CartResponse.from_summary(cart.summary())


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(product_id: str, body: UpdateCartQuantityRequest, request: Request) -> CartResponse:
    cart = _session(request).cart
    cart.update_quantity(product_id, body.quantity)
    return CartResponse.from_summary(cart.summary())


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, request: Request) -> CartResponse:
    cart = _session(request).cart
    cart.remove_from_cart(product_id)
    return CartResponse.from_summary(cart.summary())


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(request: Request) -> CartResponse:
    cart = _session(request).cart
    cart.clear_cart()
    return CartResponse.from_summary(cart.summary())


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderIdResponse)
async def submit_checkout(body: CheckoutRequest, request: Request) -> OrderIdResponse:
    form = CheckoutForm(**body.model_dump())
    order = await _session(request).checkout.submit(form)
    return OrderIdResponse(order_id=str(order.order_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderPageResponse)
async def list_orders(
    request: Request,
    search: str = "",
    status: str = ALL_STATUSES,
    start_date: date | None = None,
    end_date: date | None = None,
    sort_by: str = OrderSort.DATE_DESC.value,
    page: int = 1,
) -> OrderPageResponse:
    session = _session(request)
    order_filter = OrderFilter(
        search=search,
        status=status,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
    )
    result = query_orders(
        session.orders.orders,
        order_filter,
        page=page,
        page_size=session.settings.orders_page_size,
    )
    return OrderPageResponse(
        orders=[OrderSchema.from_order(o) for o in result.items],
        page=result.page,
        page_size=result.page_size,
        total_count=result.total_count,
        total_pages=result.total_pages,
    )


@order_router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(request: Request) -> DashboardStatsResponse:
    stats = dashboard_stats(_session(request).orders.orders)
    return DashboardStatsResponse(
        total_orders=stats.total_orders,
        total_revenue=stats.total_revenue,
        pending_orders=stats.pending_orders,
        recent_orders=[OrderSchema.from_order(o) for o in stats.recent_orders],
    )


@order_router.get("/{order_id}", response_model=OrderSchema)
async def get_order(order_id: str, request: Request) -> OrderSchema:
    order = _session(request).orders.get_order_by_id(order_id)
    return OrderSchema.from_order(order)


@order_router.put("/{order_id}/status", response_model=OrderSchema)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, request: Request) -> OrderSchema:
    order = _session(request).orders.update_order_status(order_id, body.status)
    return OrderSchema.from_order(order)
