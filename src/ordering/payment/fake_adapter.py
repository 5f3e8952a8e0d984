"""Configurable fake payment gateway for development and testing.

Simulates a gateway without any external calls. Tests flip it to failure mode
to exercise the checkout's declined-payment path.
"""

from uuid import uuid4

from ordering.payment.port import PaymentGateway, PaymentIntentResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        reference: str,
    ) -> PaymentIntentResult:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "reference": reference,
            }
        )

        if self.should_succeed:
            return PaymentIntentResult(
                success=True,
                payment_intent_id=f"pi_fake_{uuid4().hex[:12]}",
            )
        return PaymentIntentResult(
            success=False,
            failure_reason=self.failure_reason,
        )
