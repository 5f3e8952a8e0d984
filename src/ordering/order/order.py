"""Order aggregate — a settled checkout and its status lifecycle.

Statuses:
    PENDING → PAID → PROCESSING → SHIPPED → DELIVERED
    CANCELLED

PENDING is assigned when the order service accepts a checkout. From there an
administrator assigns statuses directly: any status may follow any other.
There is no transition table and no status history on the aggregate; each
assignment raises an OrderStatusChanged event and overwrites `status`.
DELIVERED and CANCELLED are terminal in the admin workflow only.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentReferenceRecorded


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentMethod(Enum):
    MOCK = "mock"
    GATEWAY = "gateway"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def parse_status(value):
    """Resolve a status name (or OrderStatus) into an OrderStatus."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip())
    except ValueError:
        raise ValidationError(
            {"status": [f"Unknown order status '{value}'. Expected one of: {', '.join(s.value for s in OrderStatus)}"]}
        ) from None


def parse_payment_method(value):
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip())
    except ValueError:
        raise ValidationError({"payment_method": [f"Unsupported payment method '{value}'"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """The delivery address captured at checkout.

    Immutable once recorded on an Order, whatever the shopper later does with
    their saved addresses.
    """

    full_name = String(required=True, max_length=255, sanitize=False)
    address_line1 = String(required=True, max_length=255, sanitize=False)
    address_line2 = String(max_length=255, sanitize=False)
    city = String(required=True, max_length=100, sanitize=False)
    state = String(required=True, max_length=100, sanitize=False)
    postal_code = String(required=True, max_length=20, sanitize=False)
    country = String(required=True, max_length=100, sanitize=False)
    phone = String(required=True, max_length=20, sanitize=False)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A frozen line of a placed order.

    Name and unit price are copied from the Product at settlement and never
    follow later catalogue edits or deletions.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255, sanitize=False)
    unit_price = Integer(required=True, min_value=0)  # minor units
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=50, sanitize=False)
    color = String(max_length=50, sanitize=False)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    total = Integer(default=0, min_value=0)  # minor units
    currency = String(max_length=3, default="INR")
    payment_method = String(choices=PaymentMethod, max_length=20)
    payment_id = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, items_data, shipping_address, payment_method, currency="INR"):
        """Create a PENDING order from settled checkout lines.

        Args:
            customer_id: The shopper placing the order.
            items_data: List of dicts with product_id, product_name,
                        unit_price (minor units), quantity, size, color.
            shipping_address: Dict with the ShippingAddress fields.
            payment_method: "mock" or "gateway".
            currency: ISO 4217 code of the prices.
        """
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        method = parse_payment_method(payment_method)
        now = datetime.now(UTC)

        order = cls(
            customer_id=customer_id,
            status=OrderStatus.PENDING.value,
            shipping_address=ShippingAddress(**shipping_address),
            currency=currency,
            payment_method=method.value,
            created_at=now,
            updated_at=now,
        )
        order.add_items([OrderItem(**item) for item in items_data])
        order.total = sum(item.line_total for item in order.items)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=len(order.items),
                total=order.total,
                currency=currency,
                payment_method=method.value,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_payment_reference(self, payment_id):
        """Attach the mock or gateway payment reference to the order."""
        if not payment_id:
            raise ValidationError({"payment_id": ["Payment reference is required"]})

        self.payment_id = payment_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentReferenceRecorded(
                order_id=str(self.id),
                payment_id=payment_id,
                payment_method=self.payment_method,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def set_status(self, new_status):
        """Assign a new status. Any status may follow any other."""
        target = parse_status(new_status)
        previous = self.status
        now = datetime.now(UTC)

        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES
