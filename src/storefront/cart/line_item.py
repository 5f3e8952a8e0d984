"""Line-item identity.

A cart line is identified by ``(product_id, size, color)``. Two adds of the
same product in different sizes or colours are different lines; the same
triple is always the same line. A missing size or colour is ``None``, and
``None`` only equals ``None``.
"""

from protean.fields import Integer, String

from storefront.domain import storefront


def normalise_product_id(product_id) -> str:
    """Product ids arrive as ints or strings; ``5`` and ``"5"`` name one product."""
    return str(product_id).strip()


def normalise_variant(value):
    """Sizes and colours compare trimmed; blank means no choice."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@storefront.value_object
class LineItemKey:
    product_id = String(required=True, max_length=255, sanitize=False)
    size = String(max_length=50, sanitize=False)
    color = String(max_length=50, sanitize=False)

    @classmethod
    def of(cls, product_id, size=None, color=None) -> "LineItemKey":
        return cls(
            product_id=normalise_product_id(product_id),
            size=normalise_variant(size),
            color=normalise_variant(color),
        )


@storefront.value_object
class LineItem:
    """One cart line: a product variant, its quantity, and what the shopper saw.

    ``name``, ``unit_price`` and ``image`` are captured when the line is first
    added and are not refreshed by later adds or catalogue changes. The order
    service re-prices at checkout.
    """

    product_id = String(required=True, max_length=255, sanitize=False)
    size = String(max_length=50, sanitize=False)
    color = String(max_length=50, sanitize=False)
    name = String(required=True, max_length=255, sanitize=False)
    unit_price = Integer(required=True, min_value=0)  # minor units
    image = String(max_length=1024, sanitize=False)
    quantity = Integer(required=True, min_value=1)

    @classmethod
    def snapshot(cls, product, quantity=1, size=None, color=None) -> "LineItem":
        """Capture a ProductReference as a new line."""
        return cls(
            product_id=normalise_product_id(product.id),
            size=normalise_variant(size),
            color=normalise_variant(color),
            name=product.name,
            unit_price=product.unit_price_minor,
            image=product.primary_image,
            quantity=quantity,
        )

    @property
    def key(self) -> LineItemKey:
        return LineItemKey(product_id=self.product_id, size=self.size, color=self.color)

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> "LineItem":
        return LineItem(**{**self.to_dict(), "quantity": quantity})
