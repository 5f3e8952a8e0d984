"""The payment gateway used by checkout settlement.

The adapter is picked by name from ``PAYMENT_GATEWAY`` the first time it is
needed; ``fake`` is the only adapter shipped and the default. Tests install
their own instance with ``set_gateway`` and drop it with ``reset_gateway``.
"""

import os

from ordering.payment.fake_adapter import FakeGateway
from ordering.payment.port import PaymentGateway, PaymentGatewayError

ADAPTERS: dict[str, type[PaymentGateway]] = {
    "fake": FakeGateway,
}

_active: PaymentGateway | None = None


def gateway_from_environment() -> PaymentGateway:
    name = os.getenv("PAYMENT_GATEWAY", "fake").strip().lower()
    try:
        adapter = ADAPTERS[name]
    except KeyError:
        available = ", ".join(sorted(ADAPTERS))
        raise PaymentGatewayError(f"Unknown payment gateway '{name}'. Available: {available}") from None
    return adapter()


def get_gateway() -> PaymentGateway:
    global _active
    if _active is None:
        _active = gateway_from_environment()
    return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    _active = gateway


def reset_gateway() -> None:
    global _active
    _active = None
