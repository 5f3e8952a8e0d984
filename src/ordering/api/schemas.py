"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Money crosses the wire twice: as integer minor
units (`*_cents`) and as an exact decimal string.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator


def _to_decimal(minor_units: int) -> Decimal:
    return (Decimal(minor_units) / 100).quantize(Decimal("0.01"))


class PaymentMethodSchema(str, Enum):
    MOCK = "mock"
    GATEWAY = "gateway"


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    full_name: str
    address_line1: str
    address_line2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str
    phone: str

    @field_validator("full_name", "address_line1", "city", "state", "postal_code", "country", "phone")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("address_line2")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class CheckoutLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    size: str | None = None
    color: str | None = None

    @field_validator("product_id", mode="before")
    @classmethod
    def normalise_id(cls, value):
        return str(value)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    lines: list[CheckoutLineSchema] = Field(min_length=1)
    shipping: ShippingAddressSchema
    payment_method: PaymentMethodSchema

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "lines": [{"product_id": "prod-001", "quantity": 2, "size": "M", "color": "Blue"}],
                    "shipping": {
                        "full_name": "Asha Rao",
                        "address_line1": "12 MG Road",
                        "address_line2": None,
                        "city": "Bengaluru",
                        "state": "KA",
                        "postal_code": "560001",
                        "country": "India",
                        "phone": "+91 98450 00000",
                    },
                    "payment_method": "mock",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price_cents: int
    unit_price: Decimal
    quantity: int
    size: str | None = None
    color: str | None = None


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    status: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    total_cents: int
    total: Decimal
    currency: str
    payment_method: str | None = None
    payment_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            status=order.status,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price_cents=item.unit_price,
                    unit_price=_to_decimal(item.unit_price),
                    quantity=item.quantity,
                    size=item.size,
                    color=item.color,
                )
                for item in order.items
            ],
            shipping_address=ShippingAddressSchema(**order.shipping_address.to_dict()),
            total_cents=order.total,
            total=_to_decimal(order.total),
            currency=order.currency,
            payment_method=order.payment_method,
            payment_id=order.payment_id,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderPageResponse(BaseModel):
    content: list[OrderResponse]
    total_elements: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def from_page(cls, page) -> "OrderPageResponse":
        return cls(
            content=[OrderResponse.from_order(order) for order in page.items],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            page=page.page,
            size=page.size,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    price: Decimal
    price_cents: int
    currency: str
    images: list[str] = []
    stock: int
    sizes: list[str] = []
    colors: list[str] = []

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            price=_to_decimal(product.price),
            price_cents=product.price,
            currency=product.currency,
            images=product.variant_list("images"),
            stock=product.stock,
            sizes=product.variant_list("sizes"),
            colors=product.variant_list("colors"),
        )


class OrderAnalyticsResponse(BaseModel):
    revenue_cents: int
    revenue: Decimal
    order_count: int
    since: datetime

    @classmethod
    def from_analytics(cls, analytics) -> "OrderAnalyticsResponse":
        return cls(
            revenue_cents=analytics.revenue,
            revenue=_to_decimal(analytics.revenue),
            order_count=analytics.order_count,
            since=analytics.since,
        )
