"""Single-flight checkout submission."""

import threading

from storefront.checkout.transformer import build_checkout_request
from storefront.errors import CheckoutInProgressError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutSubmission:
    """Submits a cart to the order service, at most one request at a time.

    The cart is cleared only after the service has accepted the order. Any
    failure, local or remote, leaves the cart exactly as it was.
    """

    def __init__(self, cart, client):
        self.cart = cart
        self.client = client
        self._in_flight = threading.Lock()

    @property
    def in_flight(self) -> bool:
        return self._in_flight.locked()

    def submit(self, shipping, payment_method):
        if not self._in_flight.acquire(blocking=False):
            raise CheckoutInProgressError("A checkout is already being submitted")
        try:
            request = build_checkout_request(self.cart, shipping, payment_method)
            try:
                order = self.client.checkout(request)
            except Exception as exc:
                logger.warning(
                    "Checkout failed",
                    error_type=type(exc).__name__,
                    error=str(exc),
                    retryable=getattr(exc, "retryable", False),
                )
                raise

            self.cart.clear()
            logger.info("Checkout complete", order_id=order.id, total_cents=order.total_cents)
            return order
        finally:
            self._in_flight.release()
