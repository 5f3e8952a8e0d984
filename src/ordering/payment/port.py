"""Payment gateway port (abstract interface).

Checkout settlement only needs one thing from a gateway: a payment intent
reference for the order total. Capturing, refunding and webhooks are the
gateway's own business.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class PaymentGatewayError(Exception):
    """The gateway refused or failed to create a payment intent."""


@dataclass(frozen=True)
class PaymentIntentResult:
    """Result of a payment intent request."""

    success: bool
    payment_intent_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        reference: str,
    ) -> PaymentIntentResult:
        """Create a payment intent for `amount` minor units of `currency`."""
        ...
