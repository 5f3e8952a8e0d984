"""The shopper's cart.

The cart owns its ordered lines and delegates every change to the merge
rules. Each mutation runs inside ``_mutation()``; on the way out, whether the
change succeeded or raised, the version is bumped and listeners are told, so
a persistence listener always sees the cart as it now stands.
"""

from collections.abc import Callable
from contextlib import contextmanager

from storefront.cart import merge
from storefront.cart.line_item import LineItem, LineItemKey
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[["Cart"], None]


class Cart:
    def __init__(self, lines=()):
        self._lines: tuple[LineItem, ...] = ()
        for line in lines:
            self._lines = merge.merge(self._lines, line)
        self._listeners: list[Listener] = []
        self.version = 0

    # -------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------
    @property
    def lines(self) -> tuple[LineItem, ...]:
        return self._lines

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @contextmanager
    def _mutation(self):
        try:
            yield
        finally:
            self.version += 1
            for listener in list(self._listeners):
                listener(self)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1, size=None, color=None) -> LineItem:
        """Add ``quantity`` of a product variant, merging with an existing line.

        The quantity is taken as given; bounding it by stock is up to the
        caller (see ``ProductReference.clamp``).
        """
        with self._mutation():
            item = LineItem.snapshot(product, quantity=quantity, size=size, color=color)
            self._lines = merge.merge(self._lines, item)
            logger.debug("Cart item added", product_id=item.product_id, quantity=quantity)
            return self._lines[merge.locate(self._lines, item.key)]

    def remove_item(self, key: LineItemKey) -> None:
        with self._mutation():
            self._lines = merge.remove(self._lines, key)

    def update_quantity(self, key: LineItemKey, quantity: int) -> None:
        """Set a line's quantity. Zero or a negative number removes the line."""
        with self._mutation():
            self._lines = merge.set_quantity(self._lines, key, quantity)

    def clear(self) -> None:
        with self._mutation():
            self._lines = ()

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def total(self) -> int:
        """Sum of line subtotals, in minor units."""
        return sum(line.subtotal for line in self._lines)

    def count(self) -> int:
        """Number of units in the cart, not the number of lines."""
        return sum(line.quantity for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"Cart(lines={len(self._lines)}, count={self.count()}, total={self.total()})"
