"""Order statuses as the storefront shows them."""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Badge(Enum):
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"
    ACCENT = "accent"
    DANGER = "danger"
    NEUTRAL = "neutral"


_BADGES = {
    OrderStatus.PENDING: Badge.WARNING,
    OrderStatus.PAID: Badge.SUCCESS,
    OrderStatus.PROCESSING: Badge.INFO,
    OrderStatus.SHIPPED: Badge.ACCENT,
    OrderStatus.DELIVERED: Badge.SUCCESS,
    OrderStatus.CANCELLED: Badge.DANGER,
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def status_badge(status) -> Badge:
    """Display category for a status; anything unrecognised is neutral."""
    if not isinstance(status, OrderStatus):
        try:
            status = OrderStatus(str(status).upper())
        except ValueError:
            return Badge.NEUTRAL
    return _BADGES.get(status, Badge.NEUTRAL)
