"""Tests for outbox processing of post-payment side effects."""

from localmarket.application.cancel_order import CancelOrderHandler
from localmarket.application.outbox import enqueue
from localmarket.application.process_outbox import ProcessOutboxHandler
from localmarket.domain.model.fulfillment import FulfillmentStatus
from localmarket.domain.model.outbox import OutboxTaskKind, OutboxTaskStatus
from tests.builders import make_order
from tests.fakes import (
    FakeFulfillmentRepository,
    FakeNotifier,
    FakeOrderRepository,
    FakeOutboxRepository,
    FixedClock,
)


class Setup:

    def __init__(self, notifier_fails: bool = False) -> None:
        self.clock = FixedClock()
        self.orders = FakeOrderRepository()
        self.fulfillments = FakeFulfillmentRepository()
        self.outbox = FakeOutboxRepository()
        self.notifier = FakeNotifier(fail=notifier_fails)
        self.order = make_order()
        self.order.mark_paid("pi_123", self.clock.now)
        self.orders.save(self.order)
        self.handler = ProcessOutboxHandler(
            self.outbox, self.orders, self.fulfillments, self.notifier, self.clock
        )

    def enqueue(self, kind: OutboxTaskKind, **payload):
        payload.setdefault("order_id", self.order.id)
        return enqueue(self.outbox, kind, payload, self.clock.now)


def test_creates_fulfillment_and_sends_confirmation():
    s = Setup()
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT)
    s.enqueue(OutboxTaskKind.SEND_ORDER_CONFIRMATION)

    report = s.handler.handle()

    assert (report.processed, report.succeeded, report.failed) == (2, 2, 0)
    assert s.fulfillments.get_by_order_id("order-1").status == FulfillmentStatus.PENDING
    assert s.notifier.sent == ["ORD-2025-0001"]
    assert s.outbox.list_pending() == []
    assert {t.status for t in s.outbox.list_all()} == {OutboxTaskStatus.DONE}


def test_notification_failure_is_recorded_not_raised():
    s = Setup(notifier_fails=True)
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT)
    s.enqueue(OutboxTaskKind.SEND_ORDER_CONFIRMATION)

    report = s.handler.handle()

    assert (report.succeeded, report.failed) == (1, 1)
    assert s.fulfillments.get_by_order_id("order-1") is not None
    [pending] = s.outbox.list_pending()
    assert pending.kind == OutboxTaskKind.SEND_ORDER_CONFIRMATION
    assert pending.attempts == 1
    assert pending.last_error == "mail provider unreachable"


def test_task_gives_up_after_max_attempts():
    s = Setup(notifier_fails=True)
    s.enqueue(OutboxTaskKind.SEND_ORDER_CONFIRMATION)

    s.handler.handle(max_attempts=2)
    s.handler.handle(max_attempts=2)

    [task] = s.outbox.list_all()
    assert task.status == OutboxTaskStatus.FAILED
    assert task.attempts == 2
    assert s.handler.handle(max_attempts=2).processed == 0


def test_fulfillment_store_outage_is_retried():
    s = Setup()
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT)
    s.fulfillments.fail_next_save = True

    assert s.handler.handle().failed == 1
    assert s.fulfillments.get_by_order_id("order-1") is None

    assert s.handler.handle().succeeded == 1
    assert s.fulfillments.get_by_order_id("order-1") is not None


def test_missing_order_fails_task():
    s = Setup()
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT, order_id="order-404")

    report = s.handler.handle()

    assert report.failed == 1
    assert "order-404" in s.outbox.list_all()[0].last_error


def test_order_cancellation_flows_through_to_fulfillment():
    s = Setup()
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT)
    s.handler.handle()

    CancelOrderHandler(s.orders, s.outbox, s.clock).handle("order-1", reason="Customer request")
    report = s.handler.handle()

    assert report.succeeded == 1
    fulfillment = s.fulfillments.get_by_order_id("order-1")
    assert fulfillment.status == FulfillmentStatus.CANCELLED
    assert fulfillment.notes == "Customer request"


def test_cancelling_without_fulfillment_still_succeeds():
    s = Setup()
    s.enqueue(OutboxTaskKind.CANCEL_FULFILLMENT)
    assert s.handler.handle().succeeded == 1


def test_empty_outbox():
    report = Setup().handler.handle()
    assert report.processed == 0


def test_retried_creation_after_order_cancellation_builds_nothing():
    s = Setup()
    s.enqueue(OutboxTaskKind.CREATE_FULFILLMENT)
    s.fulfillments.fail_next_save = True
    assert s.handler.handle().failed == 1

    CancelOrderHandler(s.orders, s.outbox, s.clock).handle("order-1", reason="Customer request")
    report = s.handler.handle()

    assert (report.processed, report.succeeded, report.failed) == (2, 2, 0)
    assert s.fulfillments.get_by_order_id("order-1") is None
    assert s.outbox.list_pending() == []
    assert s.handler.handle().processed == 0
