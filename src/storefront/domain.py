"""Storefront bounded context — the shopper's and admin's side of the shop.

Holds the cart (line-item identity, merge rules, exact totals, local
persistence), turns it into checkout requests, and talks to the order
service over HTTP.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
