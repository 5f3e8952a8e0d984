"""Local persistence for the cart.

``LocalStorage`` is a small key/value store kept in one JSON file. The cart
sits under the ``cart`` slot as a flat list of records::

    {"product_id", "name", "price", "image", "quantity", "size", "color"}

with ``price`` in minor units. ``CartStore`` subscribes to a Cart and writes
it through after every mutation.
"""

import json
import os
import tempfile
from pathlib import Path

from protean.exceptions import ValidationError

from storefront.cart import merge
from storefront.cart.cart import Cart
from storefront.cart.line_item import LineItem, normalise_product_id, normalise_variant
from storefront.errors import PersistenceError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CART_SLOT = "cart"


class LocalStorage:
    """A JSON file used as a string-keyed store.

    Writes replace the file atomically. Processes sharing a file get
    last-writer-wins.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Unreadable storage file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Storage file {self.path} does not hold an object")
        return data

    def _write_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str):
        return self._read_all().get(key)

    def set_item(self, key: str, value) -> None:
        try:
            data = self._read_all()
        except PersistenceError:
            logger.warning("Overwriting unreadable storage file", path=str(self.path))
            data = {}
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


def serialise_line(line: LineItem) -> dict:
    return {
        "product_id": line.product_id,
        "name": line.name,
        "price": line.unit_price,
        "image": line.image,
        "quantity": line.quantity,
        "size": line.size,
        "color": line.color,
    }


def deserialise_line(record: dict) -> LineItem:
    if not isinstance(record, dict):
        raise ValidationError({"cart": ["Stored line is not an object"]})
    price = record.get("price")
    quantity = record.get("quantity")
    if isinstance(price, bool) or not isinstance(price, int):
        raise ValidationError({"price": ["Stored price must be an integer"]})
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": ["Stored quantity must be an integer"]})
    return LineItem(
        product_id=normalise_product_id(record["product_id"]) if record.get("product_id") is not None else None,
        size=normalise_variant(record.get("size")),
        color=normalise_variant(record.get("color")),
        name=record.get("name"),
        unit_price=price,
        image=record.get("image"),
        quantity=quantity,
    )


class CartStore:
    """Keeps a Cart and its storage slot in step."""

    def __init__(self, storage: LocalStorage, slot: str = CART_SLOT):
        self.storage = storage
        self.slot = slot
        self.pending = False
        self._cart = None

    def load(self) -> Cart:
        """Rebuild the stored cart. Anything unusable yields an empty cart."""
        try:
            records = self.storage.get_item(self.slot)
        except PersistenceError as exc:
            logger.warning("Discarding unreadable cart", slot=self.slot, error=str(exc))
            return Cart()

        if records is None:
            return Cart()
        if not isinstance(records, list):
            logger.warning("Discarding cart snapshot of unexpected shape", slot=self.slot)
            return Cart()

        try:
            lines = tuple(deserialise_line(record) for record in records)
        except (ValidationError, KeyError, TypeError) as exc:
            logger.warning("Discarding invalid cart snapshot", slot=self.slot, error=str(exc))
            return Cart()

        # Older snapshots may hold the same key twice
        folded = ()
        for line in lines:
            folded = merge.merge(folded, line)
        return Cart(folded)

    def open_cart(self) -> Cart:
        """Load the cart and write it through on every later mutation."""
        cart = self.load()
        cart.subscribe(self.save)
        self._cart = cart
        return cart

    def save(self, cart: Cart) -> bool:
        """Persist the cart. A failed write is logged and left pending."""
        try:
            self.storage.set_item(self.slot, [serialise_line(line) for line in cart.lines])
        except OSError as exc:
            self.pending = True
            logger.error("Cart write-through failed", slot=self.slot, error=str(exc))
            return False
        self.pending = False
        return True

    def flush(self) -> bool:
        """Retry a pending write. True when storage is up to date."""
        if not self.pending or self._cart is None:
            return not self.pending
        return self.save(self._cart)
