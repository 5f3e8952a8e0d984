"""Shipping details captured on the checkout form."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

MANDATORY_FIELDS = ("full_name", "address_line1", "city", "state", "postal_code", "country", "phone")
DEFAULT_COUNTRY = "India"


@storefront.value_object
class ShippingInfo:
    """Where an order goes. Every field but ``address_line2`` must be filled in."""

    full_name = String(required=True, max_length=255, sanitize=False)
    address_line1 = String(required=True, max_length=255, sanitize=False)
    address_line2 = String(max_length=255, sanitize=False)
    city = String(required=True, max_length=100, sanitize=False)
    state = String(required=True, max_length=100, sanitize=False)
    postal_code = String(required=True, max_length=20, sanitize=False)
    country = String(required=True, max_length=100, sanitize=False)
    phone = String(required=True, max_length=20, sanitize=False)

    @invariant.post
    def mandatory_fields_are_not_blank(self):
        blank = [name for name in MANDATORY_FIELDS if not (getattr(self, name) or "").strip()]
        if blank:
            raise ValidationError({name: ["is required"] for name in blank})

    @classmethod
    def from_form(cls, form) -> "ShippingInfo":
        """Build from raw form values, trimming whitespace.

        Blank mandatory fields are rejected with a ValidationError naming each
        of them. ``country`` falls back to India when the form omits it.
        """
        values = {name: str(form.get(name) or "").strip() for name in (*MANDATORY_FIELDS, "address_line2")}
        if "country" not in form:
            values["country"] = DEFAULT_COUNTRY

        blank = [name for name in MANDATORY_FIELDS if not values[name]]
        if blank:
            raise ValidationError({name: ["is required"] for name in blank})

        values["address_line2"] = values["address_line2"] or None
        return cls(**values)

    def to_payload(self) -> dict:
        return {
            "full_name": self.full_name,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "phone": self.phone,
        }
