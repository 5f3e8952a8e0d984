"""Repository for the Order aggregate — paged listings and admin analytics."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
ANALYTICS_WINDOW_DAYS = 30


@dataclass(frozen=True)
class OrderPage:
    """One page of orders, newest first. `page` is zero-based."""

    items: list
    total_elements: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0


@dataclass(frozen=True)
class OrderAnalytics:
    """Takings and order volume over a trailing window."""

    revenue: int
    order_count: int
    since: datetime


def _check_paging(page: int, size: int) -> None:
    errors = {}
    if page < 0:
        errors["page"] = ["Page must be zero or greater"]
    if size < 1 or size > MAX_PAGE_SIZE:
        errors["size"] = [f"Size must be between 1 and {MAX_PAGE_SIZE}"]
    if errors:
        raise ValidationError(errors)


@ordering.repository(part_of=Order)
class OrderRepository:
    def page_for_customer(self, customer_id: str, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> OrderPage:
        """The shopper's own orders, most recent first."""
        _check_paging(page, size)
        results = (
            self._dao.query.filter(customer_id=customer_id)
            .order_by("-created_at")
            .offset(page * size)
            .limit(size)
            .all()
        )
        return OrderPage(items=list(results.items), total_elements=results.total, page=page, size=size)

    def page_all(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> OrderPage:
        """Every order in the system, most recent first."""
        _check_paging(page, size)
        results = self._dao.query.order_by("-created_at").offset(page * size).limit(size).all()
        return OrderPage(items=list(results.items), total_elements=results.total, page=page, size=size)

    def analytics(self, days: int = ANALYTICS_WINDOW_DAYS, now: datetime | None = None) -> OrderAnalytics:
        """Revenue from paid orders and the count of all orders placed in the last `days` days."""
        since = (now or datetime.now(UTC)) - timedelta(days=days)
        recent = self._dao.query.filter(created_at__gte=since).limit(None).all()
        revenue = sum(order.total for order in recent.items if order.status == OrderStatus.PAID.value)
        return OrderAnalytics(revenue=revenue, order_count=recent.total, since=since)

    def get_for_customer(self, customer_id: str, order_id: str) -> Order:
        """Fetch one order, hiding orders that belong to someone else."""
        order = self.get(order_id)
        if str(order.customer_id) != str(customer_id):
            raise ObjectNotFoundError(f"Order with id {order_id} does not exist.")
        return order
