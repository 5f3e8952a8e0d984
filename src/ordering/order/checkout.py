"""Checkout settlement — command and handler.

The client's cart is only an estimate. Settlement re-reads every product,
checks stock for all lines before touching anything, freezes current names and
prices into the order, records a payment reference and then reserves stock.
A request either becomes a whole order or leaves no trace.
"""

import json
import time

from protean import handle
from protean.exceptions import InvalidStateError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, PaymentMethod, parse_payment_method
from ordering.payment import get_gateway
from ordering.payment.port import PaymentGatewayError
from ordering.product.product import Product
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    lines = Text(required=True, sanitize=False)  # JSON: list of {product_id, quantity, size, color}
    shipping_address = Text(required=True, sanitize=False)  # JSON: address dict
    payment_method = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = json.loads(command.lines) if isinstance(command.lines, str) else command.lines
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        method = parse_payment_method(command.payment_method)

        product_repo = current_domain.repository_for(Product)
        products = {}
        requested = {}
        items_data = []
        for line in lines:
            product_id = str(line["product_id"])
            if product_id not in products:
                products[product_id] = product_repo.get(product_id)
            product = products[product_id]
            product.check_variant(line.get("size"), line.get("color"))

            requested[product_id] = requested.get(product_id, 0) + line["quantity"]
            items_data.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "unit_price": product.price,
                    "quantity": line["quantity"],
                    "size": line.get("size"),
                    "color": line.get("color"),
                }
            )

        # Variants of one product share its stock, so check the summed demand
        for product_id, quantity in requested.items():
            product = products[product_id]
            if not product.has_stock_for(quantity):
                logger.warning(
                    "Checkout rejected: insufficient stock",
                    product_id=product_id,
                    requested=quantity,
                    available=product.stock,
                )
                raise InvalidStateError(f"Insufficient stock for product: {product.name}")

        currency = next(iter(products.values())).currency if products else "INR"
        order = Order.place(
            customer_id=command.customer_id,
            items_data=items_data,
            shipping_address=shipping_address,
            payment_method=method,
            currency=currency,
        )
        order.record_payment_reference(self._payment_reference(order, method))

        for product_id, quantity in requested.items():
            products[product_id].reserve_stock(quantity)
            product_repo.add(products[product_id])

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            item_count=len(items_data),
            total=order.total,
            payment_method=method.value,
        )
        return str(order.id)

    def _payment_reference(self, order, method):
        if method == PaymentMethod.MOCK:
            return f"MOCK_{int(time.time() * 1000)}"

        result = get_gateway().create_payment_intent(
            amount=order.total,
            currency=order.currency,
            reference=str(order.id),
        )
        if not result.success:
            logger.warning(
                "Payment intent declined",
                order_id=str(order.id),
                reason=result.failure_reason,
            )
            raise PaymentGatewayError(f"Payment processing failed: {result.failure_reason}")
        return result.payment_intent_id
