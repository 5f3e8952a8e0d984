"""Ordering bounded context — order service behind the storefront.

Settles checkout requests into Orders (prices and stock come from the
service's own Product records, never from the client), and exposes the
administrative status assignment over an Order's lifecycle.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
