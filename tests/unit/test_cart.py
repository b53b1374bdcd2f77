"""Unit tests for cart mutations."""
import random
import threading

import pytest

from food_ordering.core.exceptions import InvalidQuantity, ItemNotFound


def cart_ids(cart):
    return [item.id for item, _ in cart.lines()]


class TestAddItem:
    """Test adding items."""

    def test_add_new_item(self, cart):
        """Test adding an item creates a line with quantity 1."""
        assert cart.add_item(1) == 1
        assert cart.quantity_of(1) == 1
        assert cart.total_quantity() == 1

    def test_add_existing_item_increments(self, cart):
        """Test adding an item again increments its line."""
        cart.add_item(1)
        cart.add_item(1)
        assert cart.add_item(1) == 3
        assert len(cart) == 1

    def test_add_unknown_item(self, cart):
        """Test adding an unknown item fails and leaves the cart alone."""
        cart.add_item(1)
        with pytest.raises(ItemNotFound):
            cart.add_item(999)
        assert cart_ids(cart) == [1]
        assert cart.total_quantity() == 1


class TestRemoveItem:
    """Test removing items."""

    def test_remove_decrements(self, cart):
        """Test removing from a line with quantity above one."""
        cart.add_item(2)
        cart.add_item(2)
        assert cart.remove_item(2) == 1
        assert cart.quantity_of(2) == 1

    def test_remove_last_unit_deletes_line(self, cart):
        """Test that the line disappears instead of staying at zero."""
        cart.add_item(2)
        assert cart.remove_item(2) == 0
        assert cart_ids(cart) == []
        assert cart.is_empty

    def test_remove_absent_item_is_noop(self, cart):
        """Test that removing an item not in the cart does nothing."""
        cart.add_item(1)
        assert cart.remove_item(3) == 0
        assert cart.remove_item(999) == 0
        assert cart_ids(cart) == [1]


class TestSetQuantity:
    """Test setting exact quantities."""

    def test_set_quantity_inserts(self, cart):
        """Test that setting a quantity on a missing line inserts it as-is."""
        assert cart.set_quantity(3, 4) == 4
        assert cart.quantity_of(3) == 4

    def test_set_quantity_replaces(self, cart):
        """Test that setting a quantity replaces rather than adds."""
        cart.add_item(3)
        cart.add_item(3)
        cart.set_quantity(3, 5)
        assert cart.quantity_of(3) == 5

    def test_set_quantity_keeps_position(self, cart):
        """Test replacing a quantity does not move the line."""
        cart.add_item(1)
        cart.add_item(2)
        cart.set_quantity(1, 3)
        assert cart_ids(cart) == [1, 2]

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_set_quantity_non_positive_removes(self, cart, quantity):
        """Test that zero or negative quantities remove the line."""
        cart.add_item(1)
        cart.add_item(2)
        assert cart.set_quantity(1, quantity) == 0
        assert 1 not in cart_ids(cart)
        assert cart_ids(cart) == [2]

    def test_set_quantity_zero_unknown_item(self, cart):
        """Test that removing an unknown item by quantity is not an error."""
        assert cart.set_quantity(999, 0) == 0

    def test_set_quantity_unknown_item(self, cart):
        """Test that a positive quantity for an unknown item fails."""
        with pytest.raises(ItemNotFound):
            cart.set_quantity(999, 2)
        assert cart.is_empty

    @pytest.mark.parametrize("quantity", [1.5, "2", None, True])
    def test_set_quantity_rejects_non_integers(self, cart, quantity):
        """Test that non-integer quantities are rejected."""
        cart.add_item(1)
        with pytest.raises(InvalidQuantity):
            cart.set_quantity(1, quantity)
        assert cart.quantity_of(1) == 1


class TestCartState:
    """Test clear, totals and line ordering."""

    def test_clear_is_idempotent(self, cart):
        """Test clearing twice leaves an empty cart without error."""
        cart.add_item(1)
        cart.add_item(2)
        cart.clear()
        cart.clear()
        assert cart.is_empty
        assert cart.total_quantity() == 0
        assert list(cart.lines()) == []

    def test_total_quantity(self, cart):
        """Test total quantity sums all lines."""
        cart.set_quantity(1, 2)
        cart.set_quantity(2, 3)
        cart.add_item(4)
        assert cart.total_quantity() == 6

    def test_lines_in_first_add_order(self, cart):
        """Test lines come back in the order items were first added."""
        cart.add_item(3)
        cart.add_item(1)
        cart.add_item(3)
        cart.add_item(2)
        assert cart_ids(cart) == [3, 1, 2]

    def test_readded_item_moves_to_end(self, cart):
        """Test that removing and re-adding an item puts it last."""
        cart.add_item(1)
        cart.add_item(2)
        cart.remove_item(1)
        cart.add_item(1)
        assert cart_ids(cart) == [2, 1]

    def test_lines_restartable(self, cart):
        """Test that the lines listing can be iterated more than once."""
        cart.add_item(1)
        cart.add_item(2)
        lines = cart.lines()
        assert list(lines) == list(lines)
        assert [(item.name, qty) for item, qty in lines] == [
            ("Margherita Pizza", 1),
            ("Classic Burger", 1),
        ]

    def test_round_trip_add_then_zero_then_add(self, cart):
        """Test add five times, set to zero, add once yields one."""
        for _ in range(5):
            cart.add_item(1)
        cart.set_quantity(1, 0)
        cart.add_item(1)
        assert cart.quantity_of(1) == 1

    def test_snapshot_lines(self, cart):
        """Test snapshot returns frozen cart lines."""
        cart.set_quantity(1, 2)
        snapshot = cart.snapshot()
        assert len(snapshot) == 1
        assert snapshot[0].item.id == 1
        assert snapshot[0].quantity == 2

        cart.clear()
        assert snapshot[0].quantity == 2

    def test_remove_lines_subtracts_snapshot(self, cart):
        """Test removing a snapshot keeps units and items added after it."""
        cart.set_quantity(1, 2)
        cart.add_item(3)
        snapshot = cart.snapshot()

        cart.add_item(1)
        cart.add_item(2)
        remaining = cart.remove_lines(snapshot)

        assert [(line.item.id, line.quantity) for line in remaining] == [(1, 1), (2, 1)]
        assert cart.quantity_of(3) == 0

    def test_remove_lines_already_removed(self, cart):
        """Test lines removed in the meantime do not go negative."""
        cart.set_quantity(1, 2)
        snapshot = cart.snapshot()
        cart.remove_item(1)

        assert cart.remove_lines(snapshot) == ()
        assert cart.is_empty

    def test_random_add_remove_never_negative(self, cart):
        """Test random add/remove sequences keep every line at one or more."""
        rng = random.Random(1234)
        expected = 0
        for _ in range(500):
            if rng.random() < 0.5:
                cart.add_item(2)
                expected += 1
            else:
                cart.remove_item(2)
                expected = max(0, expected - 1)

            assert cart.total_quantity() == expected
            for _, quantity in cart.lines():
                assert quantity >= 1

    def test_concurrent_adds_are_not_lost(self, cart):
        """Test that adds from several threads are all counted."""

        def worker():
            for _ in range(200):
                cart.add_item(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert cart.quantity_of(1) == 1600
