"""The catalogue's view of a product, as the cart receives it."""

from decimal import Decimal

from protean.exceptions import ValidationError
from pydantic import BaseModel, ConfigDict, Field

from storefront.shared.money import to_minor_units


class ProductReference(BaseModel):
    """A product as served by the catalogue when a shopper adds it to the cart.

    ``price`` is a major-unit decimal; when the service also sends
    ``price_cents`` that integer is taken as authoritative.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int | str
    name: str
    price: Decimal = Field(ge=0)
    price_cents: int | None = Field(default=None, alias="priceCents", ge=0)
    images: list[str] = []
    stock: int = Field(default=0, ge=0)
    sizes: list[str] = []
    colors: list[str] = []

    @property
    def unit_price_minor(self) -> int:
        if self.price_cents is not None:
            return self.price_cents
        return to_minor_units(self.price)

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None

    def check_variant(self, size=None, color=None) -> None:
        """Refuse a missing or unoffered size or colour.

        An empty ``sizes`` or ``colors`` list means the product has no choice
        to make for that attribute.
        """
        errors = {}
        for attribute, choice, offered in (("size", size, self.sizes), ("color", color, self.colors)):
            choice = (str(choice).strip() if choice is not None else "") or None
            if not offered:
                continue
            if choice is None:
                errors[attribute] = [f"Choose a {attribute} for {self.name}"]
            elif choice not in offered:
                errors[attribute] = [f"'{choice}' is not an available {attribute} for {self.name}"]
        if errors:
            raise ValidationError(errors)

    def clamp(self, quantity: int) -> int:
        """Bound a requested quantity by what is in stock (zero when sold out)."""
        return max(0, min(quantity, self.stock))
