"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.order.checkout import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus
from ordering.product.product import Product
from protean import current_domain
from protean.exceptions import InvalidStateError, ValidationError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def outcome():
    """Container for the last command's result or captured error."""
    return {"order_id": None, "error": None}


def _place(products, shipping_address, quantities):
    lines = [{"product_id": str(products[name].id), "quantity": quantity} for name, quantity in quantities]
    return current_domain.process(
        PlaceOrder(
            customer_id="cust-001",
            lines=json.dumps(lines),
            shipping_address=json.dumps(shipping_address),
            payment_method="mock",
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------
@given(parsers.parse('a product "{name}" priced at {price:d} paise with {stock:d} in stock'))
def _(products, name, price, stock):
    product = Product.register(name=name, price=price, stock=stock)
    current_domain.repository_for(Product).add(product)
    products[name] = product


@given(parsers.parse('a placed order for {quantity:d} of "{name}"'))
def _(products, outcome, shipping_address, quantity, name):
    outcome["order_id"] = _place(products, shipping_address, [(name, quantity)])


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------
@when(parsers.parse('the administrator sets the status to "{status}"'))
def _(outcome, status):
    try:
        current_domain.process(
            UpdateOrderStatus(order_id=outcome["order_id"], status=status),
            asynchronous=False,
        )
    except ValidationError as exc:
        outcome["error"] = exc


@when(parsers.parse('a shopper checks out {first:d} of "{first_name}" and {second:d} of "{second_name}"'))
def _(products, outcome, shipping_address, first, first_name, second, second_name):
    try:
        outcome["order_id"] = _place(products, shipping_address, [(first_name, first), (second_name, second)])
    except InvalidStateError as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------
@then(parsers.parse('the order status is "{status}"'))
def _(outcome, status):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).status == status


@then(parsers.parse("the order total is {total:d} paise"))
def _(outcome, total):
    assert current_domain.repository_for(Order).get(outcome["order_id"]).total == total


@then(parsers.parse('"{name}" has {stock:d} in stock'))
def _(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock == stock


@then("the status change is refused")
def _(outcome):
    assert isinstance(outcome["error"], ValidationError)


@then("the checkout is accepted")
def _(outcome):
    assert outcome["error"] is None
    assert outcome["order_id"] is not None


@then(parsers.parse('the checkout is rejected for insufficient stock of "{name}"'))
def _(outcome, name):
    assert isinstance(outcome["error"], InvalidStateError)
    assert f"Insufficient stock for product: {name}" in str(outcome["error"])


@then("no order exists")
def _():
    assert current_domain.repository_for(Order).page_all().total_elements == 0
