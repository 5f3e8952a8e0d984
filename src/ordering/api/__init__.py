"""Ordering domain API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.routes import (
    admin_router,
    analytics_router,
    checkout_router,
    order_router,
    product_router,
)

__all__ = [
    "admin_router",
    "analytics_router",
    "checkout_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]
