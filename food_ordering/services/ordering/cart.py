"""Shopping cart."""
import logging
import threading
from typing import Dict, Iterable, Tuple

from food_ordering.core.exceptions import InvalidQuantity
from food_ordering.services.menu.base import MenuItem
from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.ordering.models import CartLine

logger = logging.getLogger(__name__)


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}")
    return quantity


class Cart:
    """Items selected for one order session.

    Lines are keyed by item id and kept in first-add order. A line only
    exists while its quantity is at least 1. All mutations take the cart's
    lock, so concurrent callers cannot lose updates.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._quantities: Dict[int, int] = {}
        self._lock = threading.RLock()

    def add_item(self, item_id: int) -> int:
        """Add one unit of an item. Returns the new line quantity."""
        item = self.catalog.get_item(item_id)
        with self._lock:
            quantity = self._quantities.get(item.id, 0) + 1
            self._quantities[item.id] = quantity
        logger.debug(f"[CART] Added item {item.id} ({item.name}) - quantity now {quantity}")
        return quantity

    def remove_item(self, item_id: int) -> int:
        """Remove one unit of an item. Returns the remaining quantity.

        Removing an item that is not in the cart does nothing.
        """
        with self._lock:
            quantity = self._quantities.get(item_id)
            if quantity is None:
                return 0
            if quantity > 1:
                self._quantities[item_id] = quantity - 1
                return quantity - 1
            del self._quantities[item_id]
        logger.debug(f"[CART] Removed last unit of item {item_id}")
        return 0

    def set_quantity(self, item_id: int, quantity: int) -> int:
        """
        Set the exact quantity of an item.

        Args:
            item_id: Catalog id of the item
            quantity: New quantity; zero or less removes the line

        Returns:
            The quantity now in the cart for the item

        Raises:
            ItemNotFound: quantity is positive and the id is not in the catalog
            InvalidQuantity: quantity is not an integer
        """
        quantity = _check_quantity(quantity)
        if quantity <= 0:
            with self._lock:
                self._quantities.pop(item_id, None)
            return 0

        item = self.catalog.get_item(item_id)
        with self._lock:
            self._quantities[item.id] = quantity
        logger.debug(f"[CART] Set item {item.id} ({item.name}) to quantity {quantity}")
        return quantity

    def clear(self) -> None:
        with self._lock:
            self._quantities.clear()

    def remove_lines(self, lines: Iterable[CartLine]) -> Tuple[CartLine, ...]:
        """Take the given quantities out of the cart, e.g. after an order is placed.

        Units added since the lines were snapshotted stay in the cart.
        Returns the lines that remain.
        """
        with self._lock:
            for line in lines:
                remaining = self._quantities.get(line.item.id, 0) - line.quantity
                if remaining > 0:
                    self._quantities[line.item.id] = remaining
                else:
                    self._quantities.pop(line.item.id, None)
            return self.snapshot()

    def total_quantity(self) -> int:
        with self._lock:
            return sum(self._quantities.values())

    def quantity_of(self, item_id: int) -> int:
        with self._lock:
            return self._quantities.get(item_id, 0)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._quantities

    def lines(self) -> Tuple[Tuple[MenuItem, int], ...]:
        """(item, quantity) pairs in first-add order.

        The result is a point-in-time copy and can be iterated any number
        of times.
        """
        with self._lock:
            return tuple(
                (self.catalog.get_item(item_id), quantity)
                for item_id, quantity in self._quantities.items()
            )

    def snapshot(self) -> Tuple[CartLine, ...]:
        """Frozen cart lines, used when building an order request."""
        return tuple(CartLine(item=item, quantity=quantity) for item, quantity in self.lines())

    def __len__(self) -> int:
        with self._lock:
            return len(self._quantities)
