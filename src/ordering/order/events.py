"""Domain events for the Order aggregate.

Events are immutable facts. The Order itself keeps only its current status;
these events are the place a subscriber would build history from.
"""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A checkout request was accepted and settled into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Integer(required=True)  # minor units
    currency = String(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentReferenceRecorded:
    """The payment reference for an order was recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_id = String(required=True)
    payment_method = String(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator assigned a new status to an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
