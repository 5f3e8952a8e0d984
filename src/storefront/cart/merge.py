"""Merge rules over an ordered tuple of line items.

Every function is pure: it takes the current lines and returns a new tuple,
leaving the input untouched. Positions are stable, so a shopper's lines keep
the order in which they were first added.
"""

from storefront.cart.line_item import LineItem, LineItemKey


def locate(lines: tuple[LineItem, ...], key: LineItemKey) -> int | None:
    """Index of the line with ``key``, or None."""
    for index, line in enumerate(lines):
        if line.key == key:
            return index
    return None


def merge(lines: tuple[LineItem, ...], item: LineItem) -> tuple[LineItem, ...]:
    """Add ``item``, folding it into an existing line with the same key.

    On a match the quantities are summed and the existing snapshot (name,
    unit price, image) is kept: the first add wins.
    """
    index = locate(lines, item.key)
    if index is None:
        return (*lines, item)

    existing = lines[index]
    return lines[:index] + (existing.with_quantity(existing.quantity + item.quantity),) + lines[index + 1 :]


def set_quantity(lines: tuple[LineItem, ...], key: LineItemKey, quantity: int) -> tuple[LineItem, ...]:
    """Replace a line's quantity in place; zero or less removes the line."""
    if quantity <= 0:
        return remove(lines, key)

    index = locate(lines, key)
    if index is None:
        return tuple(lines)
    return lines[:index] + (lines[index].with_quantity(quantity),) + lines[index + 1 :]


def remove(lines: tuple[LineItem, ...], key: LineItemKey) -> tuple[LineItem, ...]:
    return tuple(line for line in lines if line.key != key)
