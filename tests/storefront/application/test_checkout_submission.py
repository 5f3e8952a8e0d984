"""Tests for single-flight checkout submission."""

import threading
from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.checkout.shipping import ShippingInfo
from storefront.checkout.submission import CheckoutSubmission
from storefront.errors import CheckoutInProgressError, ConflictError, TransientNetworkError
from storefront.orders.models import Order


def _order(request):
    return Order.model_validate(
        {
            "id": "ord-1",
            "customer_id": "guest",
            "status": "PENDING",
            "items": [],
            "shipping_address": request.shipping.to_payload(),
            "total_cents": 0,
            "total": Decimal("0.00"),
        }
    )


class RecordingClient:
    def __init__(self, error=None):
        self.requests = []
        self.error = error

    def checkout(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return _order(request)


class BlockingClient:
    """Holds the first checkout open until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def checkout(self, request):
        self.entered.set()
        self.release.wait(timeout=5)
        return _order(request)


class TestSubmit:
    def test_success_clears_cart(self, cart, shirt, shipping_form):
        cart.add_item(shirt, quantity=2)
        client = RecordingClient()

        order = CheckoutSubmission(cart, client).submit(shipping_form, "mock")

        assert order.id == "ord-1"
        assert cart.is_empty()
        assert client.requests[0].lines[0].quantity == 2

    def test_validation_failure_sends_nothing(self, cart, shirt, shipping_form):
        cart.add_item(shirt)
        shipping_form["city"] = ""
        client = RecordingClient()

        with pytest.raises(ValidationError):
            CheckoutSubmission(cart, client).submit(shipping_form, "mock")

        assert client.requests == []
        assert cart.count() == 1

    @pytest.mark.parametrize(
        "error",
        [TransientNetworkError("timed out"), ConflictError("Insufficient stock for product: Shirt")],
        ids=["transient", "conflict"],
    )
    def test_remote_failure_keeps_cart(self, cart, shirt, shipping_form, error):
        cart.add_item(shirt, quantity=2, size="M")
        before = cart.lines

        with pytest.raises(type(error)):
            CheckoutSubmission(cart, RecordingClient(error=error)).submit(shipping_form, "mock")

        assert cart.lines == before

    def test_transient_failure_is_retryable(self, cart, shirt, shipping_form):
        cart.add_item(shirt)
        submission = CheckoutSubmission(cart, RecordingClient(error=TransientNetworkError("down")))

        with pytest.raises(TransientNetworkError) as exc:
            submission.submit(shipping_form, "mock")
        assert exc.value.retryable is True

        submission.client = RecordingClient()
        submission.submit(shipping_form, "mock")
        assert cart.is_empty()

    def test_guard_released_after_failure(self, cart, shirt, shipping_form):
        cart.add_item(shirt)
        submission = CheckoutSubmission(cart, RecordingClient(error=ConflictError("no")))

        with pytest.raises(ConflictError):
            submission.submit(shipping_form, "mock")

        assert submission.in_flight is False


class TestSingleFlight:
    def test_second_submit_while_in_flight_is_rejected(self, cart, shirt, shipping_form):
        cart.add_item(shirt)
        shipping = ShippingInfo.from_form(shipping_form)
        client = BlockingClient()
        submission = CheckoutSubmission(cart, client)
        results = {}

        def first():
            results["order"] = submission.submit(shipping, "mock")

        worker = threading.Thread(target=first)
        worker.start()
        assert client.entered.wait(timeout=5)

        with pytest.raises(CheckoutInProgressError):
            submission.submit(shipping, "mock")

        client.release.set()
        worker.join(timeout=5)

        assert results["order"].id == "ord-1"
        assert cart.is_empty()
        assert submission.in_flight is False
