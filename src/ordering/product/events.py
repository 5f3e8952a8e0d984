"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductRegistered:
    """A product became available for checkout settlement."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    price = Integer(required=True)
    stock = Integer(required=True)


@ordering.event(part_of="Product")
class StockReserved:
    """Units of a product were taken out of stock by a placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
