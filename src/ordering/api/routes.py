"""FastAPI routes for the Ordering domain — checkout, orders and products.

Thin adapters that translate HTTP requests into domain commands.
No business logic, only schema→command→response translation.
Shoppers only read their orders; status changes go through /admin.
"""

import json

from fastapi import APIRouter, Header, Query
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CheckoutRequest,
    OrderAnalyticsResponse,
    OrderPageResponse,
    OrderResponse,
    ProductResponse,
    UpdateOrderStatusRequest,
)
from ordering.order.checkout import PlaceOrder
from ordering.order.order import Order
from ordering.order.repository import DEFAULT_PAGE_SIZE
from ordering.order.status import UpdateOrderStatus
from ordering.product.product import Product

GUEST_CUSTOMER_ID = "guest"

# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderResponse)
async def checkout(
    body: CheckoutRequest,
    x_customer_id: str = Header(GUEST_CUSTOMER_ID),
) -> OrderResponse:
    command = PlaceOrder(
        customer_id=x_customer_id,
        lines=json.dumps([line.model_dump() for line in body.lines]),
        shipping_address=json.dumps(body.shipping.model_dump()),
        payment_method=body.payment_method.value,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Order Router (shopper, read-only)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderPageResponse)
async def list_my_orders(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    x_customer_id: str = Header(GUEST_CUSTOMER_ID),
) -> OrderPageResponse:
    repo = current_domain.repository_for(Order)
    return OrderPageResponse.from_page(repo.page_for_customer(x_customer_id, page=page, size=size))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(
    order_id: str,
    x_customer_id: str = Header(GUEST_CUSTOMER_ID),
) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_customer(x_customer_id, order_id)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.get("", response_model=OrderPageResponse)
async def list_all_orders(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
) -> OrderPageResponse:
    repo = current_domain.repository_for(Order)
    return OrderPageResponse.from_page(repo.page_all(page=page, size=size))


@admin_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


analytics_router = APIRouter(prefix="/admin/analytics", tags=["admin"])


@analytics_router.get("", response_model=OrderAnalyticsResponse)
async def order_analytics() -> OrderAnalyticsResponse:
    repo = current_domain.repository_for(Order)
    return OrderAnalyticsResponse.from_analytics(repo.analytics())


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse.from_product(product)
