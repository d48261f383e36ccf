"""Integration tests for checkout: placing, paying and cancelling orders.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from localmarket.application.add_to_cart import AddToCartHandler
from localmarket.application.cancel_order import CancelOrderHandler
from localmarket.application.confirm_payment import ConfirmPaymentHandler
from localmarket.application.place_order import PlaceOrderHandler
from localmarket.application.show_order import ShowOrderHandler
from localmarket.domain.exceptions import NotFoundError, PersistenceError, ValidationError
from localmarket.domain.model.order import OrderStatus
from localmarket.domain.model.outbox import OutboxTaskKind
from tests.builders import make_product
from tests.fakes import (
    FakeCartRepository,
    FakeOrderRepository,
    FakeOutboxRepository,
    FakeProductRepository,
    FixedClock,
)


class Shop:
    """Wires the checkout handlers to a shared set of fakes."""

    def __init__(self) -> None:
        self.clock = FixedClock()
        self.products = FakeProductRepository([
            make_product("p1", "Heirloom Tomatoes", price="4.00", sale_price="3.50", stock=10),
            make_product("p2", "Raw Honey", price="12.00", stock=5),
        ])
        self.carts = FakeCartRepository()
        self.orders = FakeOrderRepository()
        self.outbox = FakeOutboxRepository()
        self.add = AddToCartHandler(self.carts, self.products, clock=self.clock)
        self.place = PlaceOrderHandler(self.carts, self.products, self.orders, self.clock)
        self.pay = ConfirmPaymentHandler(
            self.orders, self.products, self.carts, self.outbox, self.clock
        )
        self.cancel = CancelOrderHandler(self.orders, self.outbox, self.clock)

    def checkout(self, owner_id: str = "u-customer"):
        self.add.handle(owner_id, "p1", 2)
        self.add.handle(owner_id, "p2", 1)
        return self.place.handle(owner_id, "Cara Customer", "cara@example.com")


@pytest.fixture
def shop():
    return Shop()


class TestPlaceOrder:

    def test_order_snapshots_cart(self, shop):
        dto = shop.checkout()

        assert dto.order_number == "ORD-2025-0001"
        assert dto.status == "pending"
        assert dto.payment_status == "pending"
        assert dto.subtotal == "$19.00"
        assert [i.unit_price for i in dto.items] == ["$3.50", "$12.00"]

    def test_cart_kept_until_payment(self, shop):
        shop.checkout()
        assert shop.carts.get("u-customer").item_count == 3

    def test_order_numbers_increase(self, shop):
        shop.checkout("u1")
        second = shop.checkout("u2")
        assert second.order_number == "ORD-2025-0002"

    def test_empty_cart_rejected(self, shop):
        with pytest.raises(ValidationError, match="empty cart"):
            shop.place.handle("nobody", "N", "n@example.com")

    def test_stock_rechecked_at_checkout(self, shop):
        shop.add.handle("u1", "p2", 4)
        honey = shop.products.get_by_id("p2")
        honey.stock = 2
        shop.products.save(honey)

        with pytest.raises(ValidationError, match="Only 2 of Raw Honey left"):
            shop.place.handle("u1", "U", "u@example.com")

    def test_retired_product_rejected(self, shop):
        shop.add.handle("u1", "p1", 1)
        tomatoes = shop.products.get_by_id("p1")
        tomatoes.is_active = False
        shop.products.save(tomatoes)

        with pytest.raises(NotFoundError, match="no longer available"):
            shop.place.handle("u1", "U", "u@example.com")


class TestConfirmPayment:

    def test_marks_paid_and_enqueues_follow_ups(self, shop):
        order = shop.checkout()

        assert shop.pay.handle(order.id, "pi_123") is True

        stored = shop.orders.get_by_id(order.id)
        assert stored.status == OrderStatus.PAID
        assert stored.payment_reference == "pi_123"
        kinds = [t.kind for t in shop.outbox.list_pending()]
        assert kinds == [
            OutboxTaskKind.CREATE_FULFILLMENT,
            OutboxTaskKind.SEND_ORDER_CONFIRMATION,
        ]
        assert all(t.payload == {"order_id": order.id} for t in shop.outbox.list_all())

    def test_decrements_stock_and_clears_cart(self, shop):
        order = shop.checkout()
        shop.pay.handle(order.id, "pi_123")

        assert shop.products.get_by_id("p1").stock == 8
        assert shop.products.get_by_id("p2").stock == 4
        assert shop.carts.get("u-customer") is None

    def test_duplicate_confirmation_is_ignored(self, shop):
        order = shop.checkout()
        shop.pay.handle(order.id, "pi_123")

        assert shop.pay.handle(order.id, "pi_123") is False
        assert len(shop.outbox.list_all()) == 2
        assert shop.products.get_by_id("p1").stock == 8

    def test_missing_product_does_not_block_payment(self, shop):
        order = shop.checkout()
        shop.products._store.pop("p2")

        assert shop.pay.handle(order.id, "pi_123") is True
        assert shop.products.get_by_id("p1").stock == 8

    def test_unknown_order(self, shop):
        with pytest.raises(NotFoundError):
            shop.pay.handle("nope", "pi_123")


class UnwritableProductRepository(FakeProductRepository):

    def save(self, product) -> None:
        raise PersistenceError("Could not write collection 'products'")


class UnwritableCartRepository(FakeCartRepository):

    def delete(self, owner_id: str) -> None:
        raise PersistenceError("Could not write collection 'savedCarts'")


class TestConfirmPaymentBookkeepingFailures:

    def _paid_order(self, shop):
        order = shop.checkout()
        shop.pay = ConfirmPaymentHandler(
            shop.orders,
            UnwritableProductRepository(shop.products.list_all()),
            shop.carts,
            shop.outbox,
            shop.clock,
        )
        return order

    def test_stock_write_failure_still_queues_fulfillment(self, shop):
        order = self._paid_order(shop)

        assert shop.pay.handle(order.id, "pi_123") is True

        assert shop.orders.get_by_id(order.id).status == OrderStatus.PAID
        kinds = [t.kind for t in shop.outbox.list_pending()]
        assert OutboxTaskKind.CREATE_FULFILLMENT in kinds
        assert OutboxTaskKind.SEND_ORDER_CONFIRMATION in kinds
        assert shop.carts.get("u-customer") is None

    def test_redelivery_after_stock_failure_keeps_tasks(self, shop):
        order = self._paid_order(shop)
        shop.pay.handle(order.id, "pi_123")

        assert shop.pay.handle(order.id, "pi_123") is False
        assert len(shop.outbox.list_all()) == 2

    def test_cart_delete_failure_still_queues_fulfillment(self, shop):
        order = shop.checkout()
        handler = ConfirmPaymentHandler(
            shop.orders,
            shop.products,
            UnwritableCartRepository([shop.carts.get("u-customer")]),
            shop.outbox,
            shop.clock,
        )

        assert handler.handle(order.id, "pi_123") is True
        assert shop.products.get_by_id("p1").stock == 8
        assert len(shop.outbox.list_pending()) == 2


class TestCancelOrder:

    def test_cancel_enqueues_fulfillment_cancellation(self, shop):
        order = shop.checkout()
        shop.pay.handle(order.id, "pi_123")

        shop.cancel.handle(order.id, reason="Out of delivery area")

        assert shop.orders.get_by_id(order.id).status == OrderStatus.CANCELLED
        task = shop.outbox.list_all()[-1]
        assert task.kind == OutboxTaskKind.CANCEL_FULFILLMENT
        assert task.payload == {"order_id": order.id, "reason": "Out of delivery area"}

    def test_cancel_twice_rejected(self, shop):
        order = shop.checkout()
        shop.cancel.handle(order.id)
        with pytest.raises(ValidationError, match="already cancelled"):
            shop.cancel.handle(order.id)
        assert len(shop.outbox.list_all()) == 1


def test_show_order(shop):
    order = shop.checkout()
    dto = ShowOrderHandler(shop.orders).handle(order.id)
    assert dto.customer_name == "Cara Customer"
    assert dto.created_at == "2025-06-01 09:00 UTC"
    with pytest.raises(NotFoundError):
        ShowOrderHandler(shop.orders).handle("nope")
