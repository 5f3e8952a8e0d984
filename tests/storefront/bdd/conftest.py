"""Shared BDD fixtures and step definitions for the storefront."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import Cart
from storefront.cart.line_item import LineItemKey
from storefront.cart.product import ProductReference
from storefront.cart.storage import CartStore, LocalStorage
from storefront.checkout.submission import CheckoutSubmission
from storefront.orders.models import Order
from storefront.shared.money import from_minor_units


class RecordingOrderService:
    """Stands in for the order service; remembers what it was sent."""

    def __init__(self):
        self.requests = []

    def checkout(self, request):
        self.requests.append(request)
        return Order.model_validate(
            {
                "id": f"ord-{len(self.requests)}",
                "customer_id": "guest",
                "status": "PENDING",
                "items": [],
                "shipping_address": request.shipping.to_payload(),
                "total_cents": 0,
                "total": "0.00",
            }
        )


@pytest.fixture()
def shop():
    return {"cart": None, "store": None, "products": {}, "shipping": None, "error": None}


@pytest.fixture()
def order_service():
    return RecordingOrderService()


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------
@given("an empty cart")
def _(shop):
    shop["cart"] = Cart()


@given("an empty cart backed by local storage")
def _(shop, tmp_path):
    shop["store"] = CartStore(LocalStorage(tmp_path / "storage.json"))
    shop["cart"] = shop["store"].open_cart()


@given(parsers.parse('a shirt "{name}" priced at {price} with {stock:d} in stock'))
def _(shop, name, price, stock):
    shop["products"][name] = ProductReference(
        id=f"p-{len(shop['products']) + 1}",
        name=name,
        price=Decimal(price),
        stock=stock,
    )


@given("a complete shipping address")
def _(shop, shipping_form):
    shop["shipping"] = dict(shipping_form)


@given("a shipping address with an empty city")
def _(shop, shipping_form):
    shop["shipping"] = dict(shipping_form, city="")


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------
@given(parsers.parse('I add {quantity:d} of "{name}" in size "{size}" and colour "{color}"'))
@when(parsers.parse('I add {quantity:d} of "{name}" in size "{size}" and colour "{color}"'))
def _(shop, quantity, name, size, color):
    shop["cart"].add_item(shop["products"][name], quantity=quantity, size=size, color=color)


@when(parsers.parse('I set the quantity of "{name}" in size "{size}" and colour "{color}" to {quantity:d}'))
def _(shop, name, size, color, quantity):
    product = shop["products"][name]
    shop["cart"].update_quantity(LineItemKey.of(product.id, size, color), quantity)


@when("I reopen the cart from local storage")
def _(shop):
    shop["cart"] = shop["store"].open_cart()


@when(parsers.parse('I check out paying by "{method}"'))
def _(shop, order_service, method):
    submission = CheckoutSubmission(shop["cart"], order_service)
    try:
        submission.submit(shop["shipping"], method)
    except ValidationError as exc:
        shop["error"] = exc


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------
@then(parsers.parse("the cart total is {amount}"))
def _(shop, amount):
    assert from_minor_units(shop["cart"].total()) == Decimal(amount)


@then(parsers.parse("the cart count is {count:d}"))
def _(shop, count):
    assert shop["cart"].count() == count


@then(parsers.parse("the cart has {count:d} line"))
@then(parsers.parse("the cart has {count:d} lines"))
def _(shop, count):
    assert len(shop["cart"].lines) == count


@then("the cart is empty")
def _(shop):
    assert shop["cart"].is_empty()


@then(parsers.parse('the line for "{name}" in size "{size}" and colour "{color}" has quantity {quantity:d}'))
def _(shop, name, size, color, quantity):
    key = LineItemKey.of(shop["products"][name].id, size, color)
    line = next(line for line in shop["cart"].lines if line.key == key)
    assert line.quantity == quantity


@then(parsers.parse('checkout fails with a validation error on "{field}"'))
def _(shop, field):
    assert shop["error"] is not None
    assert field in shop["error"].messages


@then("no request reached the order service")
def _(order_service):
    assert order_service.requests == []


@then(parsers.parse("the order service received {count:d} line with quantity {quantity:d}"))
def _(order_service, count, quantity):
    request = order_service.requests[-1]
    assert len(request.lines) == count
    assert request.lines[0].quantity == quantity
