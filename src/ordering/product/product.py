"""Product aggregate — the order service's view of a catalogue item.

Only what settlement needs lives here: the current price (integer minor
units), stock on hand, and the variant lists a shopper may pick from. Catalogue
search, media upload and merchandising belong to the catalogue service.
"""

import json

from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import Integer, String, Text

from ordering.domain import ordering
from ordering.product.events import ProductRegistered, StockReserved


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255, sanitize=False)
    price = Integer(required=True, min_value=0)  # minor units (paise)
    currency = String(max_length=3, default="INR")
    stock = Integer(default=0, min_value=0)
    sizes = Text(sanitize=False)  # JSON array
    colors = Text(sanitize=False)  # JSON array
    images = Text(sanitize=False)  # JSON array of image URLs

    @classmethod
    def register(cls, name, price, stock, sizes=None, colors=None, images=None, currency="INR", product_id=None):
        attributes = {
            "name": name,
            "price": price,
            "currency": currency,
            "stock": stock,
            "sizes": json.dumps(sizes or []),
            "colors": json.dumps(colors or []),
            "images": json.dumps(images or []),
        }
        if product_id is not None:
            attributes["id"] = str(product_id)

        product = cls(**attributes)
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
            )
        )
        return product

    def has_stock_for(self, quantity):
        return (self.stock or 0) >= quantity

    def reserve_stock(self, quantity):
        """Take units out of stock for a placed order."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise InvalidStateError(f"Insufficient stock for product: {self.name}")

        self.stock -= quantity

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.stock,
            )
        )

    def variant_list(self, field_name):
        raw = getattr(self, field_name)
        return json.loads(raw) if raw else []

    def check_variant(self, size=None, color=None):
        """Reject a missing or unoffered size or colour.

        A product with no sizes (or no colours) on record accepts any choice
        for that attribute, including none.
        """
        errors = {}
        for attribute, choice in (("size", size), ("color", color)):
            offered = self.variant_list(f"{attribute}s")
            choice = (choice or "").strip() or None
            if not offered:
                continue
            if choice is None:
                errors[attribute] = [f"Choose a {attribute} for {self.name}"]
            elif choice not in offered:
                errors[attribute] = [f"'{choice}' is not an available {attribute} for {self.name}"]
        if errors:
            raise ValidationError(errors)
