"""Pydantic request/response schemas for the Storefront API.

These are the external contracts; responses are built from the domain
objects with the ``from_*`` constructors below.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.shared.money import round_currency


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductSummarySchema(BaseModel):
    id: str
    name: str
    category: str
    price: float
    description: str | None = None
    image: str | None = None
    best_seller: bool
    in_stock: bool
    rating: float
    review_count: int
    tags: list[str] = []

    @classmethod
    def from_product(cls, product) -> "ProductSummarySchema":
        return cls(
            id=str(product.product_id),
            name=product.name,
            category=product.category,
            price=product.price,
            description=product.description,
            image=product.image,
            best_seller=product.best_seller,
            in_stock=product.in_stock,
            rating=product.rating,
            review_count=product.review_count,
            tags=list(product.tags or []),
        )


class ProductDetailSchema(ProductSummarySchema):
    long_description: str | None = None
    images: list[str] = []
    certifications: list[str] = []
    ingredients: list[str] = []
    benefits: list[str] = []
    serving_size: str | None = None
    servings_per_container: int | None = None

    @classmethod
    def from_product(cls, product) -> "ProductDetailSchema":
        summary = ProductSummarySchema.from_product(product).model_dump()
        return cls(
            **summary,
            long_description=product.long_description,
            images=list(product.images or []),
            certifications=list(product.certifications or []),
            ingredients=list(product.ingredients or []),
            benefits=list(product.benefits or []),
            serving_size=product.serving_size,
            servings_per_container=product.servings_per_container,
        )


class ProductListResponse(BaseModel):
    products: list[ProductSummarySchema]
    count: int
    categories: list[str]
    max_price: float


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "1",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineSchema(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    items: list[CartLineSchema]
    total_items: int
    subtotal: float
    shipping_cost: float
    total: float
    amount_to_free_shipping: float

    @classmethod
    def from_summary(cls, summary) -> "CartResponse":
        return cls(
            items=[
                CartLineSchema(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in summary.lines
            ],
            total_items=summary.total_items,
            subtotal=summary.subtotal,
            shipping_cost=summary.shipping_cost,
            total=summary.total,
            amount_to_free_shipping=summary.amount_to_free_shipping,
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "USA"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email": "jane@example.com",
                    "phone": "(555) 123-4567",
                    "street": "123 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "USA",
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderItemSchema(BaseModel):
    product_id: str
    product_name: str
    category: str | None = None
    unit_price: float
    quantity: int
    line_total: float


class OrderSchema(BaseModel):
    order_id: str
    status: str
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: dict
    items: list[OrderItemSchema]
    subtotal: float
    shipping_cost: float
    total_amount: float
    order_date: datetime
    shipping_date: datetime | None = None
    delivery_date: datetime | None = None
    tracking_number: str | None = None
    notes: str | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSchema":
        address = order.shipping_address
        return cls(
            order_id=str(order.order_id),
            status=order.status,
            customer_name=order.customer.full_name,
            customer_email=order.customer.email,
            customer_phone=order.customer.phone,
            shipping_address={
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            items=[
                OrderItemSchema(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    category=item.category,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    line_total=round_currency(item.line_total),
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            shipping_cost=order.shipping_cost,
            total_amount=order.total_amount,
            order_date=order.order_date,
            shipping_date=order.shipping_date,
            delivery_date=order.delivery_date,
            tracking_number=order.tracking_number,
            notes=order.notes,
        )


class OrderPageResponse(BaseModel):
    orders: list[OrderSchema]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class DashboardStatsResponse(BaseModel):
    total_orders: int
    total_revenue: float
    pending_orders: int
    recent_orders: list[OrderSchema]
