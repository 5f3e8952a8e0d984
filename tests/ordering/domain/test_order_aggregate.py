"""Tests for the Order aggregate — placement, payment reference and status assignment."""

import pytest
from ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentReferenceRecorded
from ordering.order.order import (
    TERMINAL_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    ShippingAddress,
    parse_status,
)
from protean.exceptions import ValidationError
from protean.utils import DomainObjects


def _items(**overrides):
    item = {
        "product_id": "prod-001",
        "product_name": "Classic Oxford Shirt",
        "unit_price": 99900,
        "quantity": 3,
        "size": "M",
        "color": "Blue",
    }
    item.update(overrides)
    return [item]


def _place(shipping_address, items=None, **kwargs):
    return Order.place(
        customer_id=kwargs.get("customer_id", "cust-001"),
        items_data=_items() if items is None else items,
        shipping_address=shipping_address,
        payment_method=kwargs.get("payment_method", "mock"),
    )


class TestElementTypes:
    def test_order_is_aggregate(self):
        assert Order.element_type == DomainObjects.AGGREGATE

    def test_order_item_is_entity(self):
        assert OrderItem.element_type == DomainObjects.ENTITY

    def test_shipping_address_is_value_object(self):
        assert ShippingAddress.element_type == DomainObjects.VALUE_OBJECT


class TestPlace:
    def test_new_order_is_pending(self, shipping_address):
        order = _place(shipping_address)

        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id == "cust-001"
        assert order.payment_method == PaymentMethod.MOCK.value
        assert order.created_at is not None

    def test_total_is_exact_minor_units(self, shipping_address):
        order = _place(
            shipping_address,
            items=_items() + _items(product_id="prod-002", product_name="Linen", unit_price=149950, quantity=1),
        )
        assert order.total == 99900 * 3 + 149950

    def test_items_are_frozen_snapshots(self, shipping_address):
        order = _place(shipping_address)
        item = order.items[0]

        assert item.product_name == "Classic Oxford Shirt"
        assert item.unit_price == 99900
        assert item.line_total == 299700

    def test_shipping_address_is_recorded(self, shipping_address):
        order = _place(shipping_address)
        assert order.shipping_address.city == "Bengaluru"
        assert order.shipping_address.address_line2 is None

    def test_raises_order_placed(self, shipping_address):
        order = _place(shipping_address)

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.total == 299700
        assert event.item_count == 1
        assert event.payment_method == "mock"

    def test_empty_items_rejected(self, shipping_address):
        with pytest.raises(ValidationError) as exc:
            _place(shipping_address, items=[])
        assert "items" in exc.value.messages

    def test_zero_quantity_rejected(self, shipping_address):
        with pytest.raises(ValidationError):
            _place(shipping_address, items=_items(quantity=0))

    def test_unknown_payment_method_rejected(self, shipping_address):
        with pytest.raises(ValidationError) as exc:
            _place(shipping_address, payment_method="barter")
        assert "payment_method" in exc.value.messages

    def test_incomplete_shipping_address_rejected(self, shipping_address):
        del shipping_address["city"]
        with pytest.raises(ValidationError):
            _place(shipping_address)


class TestPaymentReference:
    def test_records_payment_id(self, shipping_address):
        order = _place(shipping_address)
        order._events.clear()

        order.record_payment_reference("MOCK_1700000000000")

        assert order.payment_id == "MOCK_1700000000000"
        assert isinstance(order._events[0], PaymentReferenceRecorded)

    def test_blank_reference_rejected(self, shipping_address):
        order = _place(shipping_address)
        with pytest.raises(ValidationError):
            order.record_payment_reference("")


class TestSetStatus:
    def test_pending_to_delivered_is_accepted(self, shipping_address):
        order = _place(shipping_address)
        order.set_status("DELIVERED")
        assert order.status == OrderStatus.DELIVERED.value

    @pytest.mark.parametrize("start", list(OrderStatus))
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_any_status_may_follow_any_other(self, shipping_address, start, target):
        order = _place(shipping_address)
        order.set_status(start)
        order.set_status(target)
        assert order.status == target.value

    def test_terminal_status_can_be_reopened(self, shipping_address):
        order = _place(shipping_address)
        order.set_status(OrderStatus.CANCELLED)
        assert order.is_terminal

        order.set_status(OrderStatus.PROCESSING)
        assert order.status == "PROCESSING"
        assert not order.is_terminal

    def test_raises_status_changed(self, shipping_address):
        order = _place(shipping_address)
        order._events.clear()

        order.set_status("SHIPPED")

        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "PENDING"
        assert event.new_status == "SHIPPED"

    def test_unknown_status_rejected(self, shipping_address):
        order = _place(shipping_address)

        with pytest.raises(ValidationError) as exc:
            order.set_status("LOST")

        assert "status" in exc.value.messages
        assert order.status == "PENDING"

    def test_updated_at_moves(self, shipping_address):
        order = _place(shipping_address)
        before = order.updated_at
        order.set_status("PAID")
        assert order.updated_at >= before


class TestStatusHelpers:
    def test_parse_status_strips(self):
        assert parse_status(" PAID ") == OrderStatus.PAID

    def test_status_names_are_case_sensitive(self):
        with pytest.raises(ValidationError):
            parse_status("paid")

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
