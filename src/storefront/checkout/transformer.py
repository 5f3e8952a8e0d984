"""Turns a cart into a checkout request.

The request carries only what the order service needs to settle: product,
variant and quantity per line. Names, prices and images stay behind; the
service prices the order from its own records.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from storefront.checkout.shipping import ShippingInfo


class PaymentMethod(Enum):
    MOCK = "mock"
    GATEWAY = "gateway"


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None

    def to_payload(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "size": self.size,
            "color": self.color,
        }


@dataclass(frozen=True)
class CheckoutRequest:
    """A frozen snapshot of the cart at submit time.

    Later cart edits do not reach a request that has already been built.
    """

    lines: tuple[CheckoutLine, ...]
    shipping: ShippingInfo
    payment_method: PaymentMethod

    def to_payload(self) -> dict:
        return {
            "lines": [line.to_payload() for line in self.lines],
            "shipping": self.shipping.to_payload(),
            "payment_method": self.payment_method.value,
        }


def _payment_method(value) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().lower())
    except ValueError:
        raise ValidationError({"payment_method": [f"Unsupported payment method '{value}'"]}) from None


def _shipping(value) -> ShippingInfo:
    if isinstance(value, ShippingInfo):
        return value
    return ShippingInfo.from_form(value)


def build_checkout_request(cart, shipping, payment_method) -> CheckoutRequest:
    """Validate and project the cart.

    Raises:
        ValidationError: the cart is empty, a mandatory shipping field is
            blank, or the payment method is not supported.
    """
    if cart.is_empty():
        raise ValidationError({"cart": ["Cannot check out an empty cart"]})

    method = _payment_method(payment_method)
    info = _shipping(shipping)

    lines = tuple(
        CheckoutLine(
            product_id=line.product_id,
            quantity=line.quantity,
            size=line.size,
            color=line.color,
        )
        for line in cart.lines
    )
    return CheckoutRequest(lines=lines, shipping=info, payment_method=method)
