"""Read models for orders returned by the order service."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from storefront.orders.status import Badge, OrderStatus, status_badge
from storefront.shared.money import format_price


class ShippingAddressView(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str
    address_line1: str
    address_line2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str
    phone: str


class OrderLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    unit_price_cents: int
    unit_price: Decimal
    quantity: int
    size: str | None = None
    color: str | None = None

    @property
    def subtotal_cents(self) -> int:
        return self.unit_price_cents * self.quantity


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    customer_id: str
    status: OrderStatus
    items: list[OrderLine]
    shipping_address: ShippingAddressView
    total_cents: int
    total: Decimal
    currency: str = "INR"
    payment_method: str | None = None
    payment_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def badge(self) -> Badge:
        return status_badge(self.status)

    @property
    def display_total(self) -> str:
        return format_price(self.total_cents, self.currency)


class OrderPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: list[Order]
    total_elements: int
    total_pages: int
    page: int
    size: int

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages


class OrderAnalytics(BaseModel):
    model_config = ConfigDict(frozen=True)

    revenue_cents: int
    revenue: Decimal
    order_count: int
    since: datetime | None = None

    @property
    def display_revenue(self) -> str:
        return format_price(self.revenue_cents)
