"""Unit tests for the Cart aggregate."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.model.cart import Cart, CartItem
from localmarket.domain.model.value_objects import Money
from tests.builders import make_product


def _assert_totals_consistent(cart: Cart) -> None:
    expected_subtotal = sum((i.subtotal.amount for i in cart.items), Decimal("0"))
    assert cart.subtotal.amount == expected_subtotal.quantize(Decimal("0.01"))
    assert cart.item_count == sum(i.quantity for i in cart.items)


# ── Adding items ─────────────────────────────────────────────────────────────


class TestAddItem:

    def test_new_line_snapshots_product(self):
        cart = Cart(owner_id="u1")
        product = make_product(price="7.49", sale_price="5.99", stock=12)

        item = cart.add_item(product, 2)

        assert item.product_id == "p1"
        assert item.product_slug == "heirloom-tomatoes"
        assert item.image == "https://cdn.example.com/p1.jpg"
        assert item.stock == 12
        assert item.unit == "lb"
        assert item.vendor_name == "Sunny Acres Farm"
        assert item.subtotal == Money.of("11.98")

    def test_existing_product_increases_quantity(self):
        cart = Cart(owner_id="u1")
        product = make_product()
        cart.add_item(product, 1)
        cart.add_item(product, 2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.subtotal == Money.of("30.00")

    def test_default_quantity_is_one(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product())
        assert cart.item_count == 1

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        cart = Cart(owner_id="u1")
        with pytest.raises(ValidationError, match="must be positive"):
            cart.add_item(make_product(), quantity)
        assert cart.is_empty

    def test_aggregate_does_not_enforce_stock(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product(stock=1), 5)
        assert cart.items[0].quantity == 5


# ── Worked scenario ──────────────────────────────────────────────────────────


class TestTwoLineScenario:

    def test_subtotal_and_count(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product("a", "Product A", price="10.00"), 3)
        cart.add_item(make_product("b", "Product B", price="7.49", sale_price="5.99"), 2)

        assert cart.items[0].subtotal == Money.of("30.00")
        assert cart.items[1].subtotal == Money.of("11.98")
        assert cart.subtotal == Money.of("41.98")
        assert cart.item_count == 5
        assert cart.unique_item_count == 2


# ── Updating and removing ────────────────────────────────────────────────────


class TestUpdateQuantity:

    def test_sets_quantity_and_recomputes(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product(price="2.50"), 1)
        cart.update_quantity("p1", 4)
        assert cart.items[0].quantity == 4
        assert cart.subtotal == Money.of("10.00")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_below_one_removes_line(self, quantity):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product("a", "Product A"), 1)
        cart.add_item(make_product("b", "Product B"), 1)

        cart.update_quantity("a", quantity)

        assert cart.find_item("a") is None
        assert [i.product_id for i in cart.items] == ["b"]
        _assert_totals_consistent(cart)

    def test_unknown_product_rejected(self):
        cart = Cart(owner_id="u1")
        with pytest.raises(NotFoundError, match="not in the cart"):
            cart.update_quantity("missing", 2)


class TestRemoveItem:

    def test_removes_line(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product(), 2)
        cart.remove_item("p1")
        assert cart.is_empty
        assert cart.subtotal.amount == Decimal("0.00")
        assert cart.item_count == 0

    def test_unknown_product_is_noop(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product(), 2)
        cart.remove_item("missing")
        assert cart.item_count == 2


class TestClear:

    def test_clear_empties_cart(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product("a", "Product A"), 1)
        cart.add_item(make_product("b", "Product B"), 1)
        cart.clear()
        assert cart.is_empty
        assert cart.item_count == 0


class TestTotalsAfterMutationSequence:

    def test_totals_always_consistent(self):
        cart = Cart(owner_id="u1")
        a = make_product("a", "Apples", price="1.335")
        b = make_product("b", "Bread", price="4.99", sale_price="3.995")
        c = make_product("c", "Cheese", price="12.10")

        steps = [
            lambda: cart.add_item(a, 3),
            lambda: cart.add_item(b, 1),
            lambda: cart.add_item(c, 2),
            lambda: cart.update_quantity("b", 7),
            lambda: cart.add_item(a, 1),
            lambda: cart.remove_item("c"),
            lambda: cart.update_quantity("a", 0),
            lambda: cart.add_item(c, 1),
        ]
        for step in steps:
            step()
            _assert_totals_consistent(cart)

        assert cart.item_count == 8


# ── Merge and expiry ─────────────────────────────────────────────────────────


class TestMerge:

    def test_merge_adds_quantities_and_new_lines(self):
        cart = Cart(owner_id="u1")
        cart.add_item(make_product("a", "Product A", price="2.00"), 1)

        guest = Cart(owner_id="guest-1")
        guest.add_item(make_product("a", "Product A", price="2.00"), 2)
        guest.add_item(make_product("b", "Product B", price="3.00"), 1)

        cart.merge(guest.items)

        assert cart.find_item("a").quantity == 3
        assert cart.find_item("b").quantity == 1
        assert cart.subtotal == Money.of("9.00")


class TestTouch:

    def test_sets_expiry_from_ttl(self):
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        cart = Cart(owner_id="u1")
        cart.touch(now, timedelta(days=30))
        assert cart.updated_at == now
        assert cart.expires_at == now + timedelta(days=30)

    def test_no_ttl_means_no_expiry(self):
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        cart = Cart(owner_id="u1")
        cart.touch(now)
        assert cart.expires_at is None


class TestCartItem:

    def test_from_product_rejects_zero(self):
        with pytest.raises(ValidationError):
            CartItem.from_product(make_product(), 0)
