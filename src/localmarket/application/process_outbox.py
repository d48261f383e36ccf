"""Application service: Process Outbox use case.

Runs queued side effects. A failing task is logged and recorded on the
task itself, never raised: the write that queued it has already
committed and must not be affected.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from localmarket.application.cancel_fulfillment import CancelFulfillmentHandler
from localmarket.application.clock import Clock, utc_now
from localmarket.application.create_fulfillment import CreateOrderFulfillmentHandler
from localmarket.domain.exceptions import NotFoundError
from localmarket.domain.model.order import Order
from localmarket.domain.model.outbox import OutboxTask, OutboxTaskKind
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.repository.notifier import Notifier
from localmarket.domain.repository.order_repository import OrderRepository
from localmarket.domain.repository.outbox_repository import OutboxRepository

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class OutboxReport:
    processed: int
    succeeded: int
    failed: int


class ProcessOutboxHandler:

    def __init__(
        self,
        outbox_repo: OutboxRepository,
        order_repo: OrderRepository,
        fulfillment_repo: FulfillmentRepository,
        notifier: Notifier,
        clock: Clock = utc_now,
    ) -> None:
        self._outbox_repo = outbox_repo
        self._order_repo = order_repo
        self._notifier = notifier
        self._clock = clock
        self._create_fulfillment = CreateOrderFulfillmentHandler(fulfillment_repo, clock)
        self._cancel_fulfillment = CancelFulfillmentHandler(fulfillment_repo, clock)

    def handle(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> OutboxReport:
        succeeded = failed = 0
        tasks = self._outbox_repo.list_pending()

        for task in tasks:
            try:
                self._run(task)
            except Exception as exc:
                task.record_failure(str(exc), self._clock(), max_attempts)
                failed += 1
                logger.error(
                    "Outbox task failed",
                    task_id=task.id,
                    kind=task.kind.value,
                    attempts=task.attempts,
                    status=task.status.value,
                    error=str(exc),
                )
            else:
                task.mark_done(self._clock())
                succeeded += 1
            self._outbox_repo.save(task)

        if tasks:
            logger.info(
                "Outbox processed",
                processed=len(tasks),
                succeeded=succeeded,
                failed=failed,
            )
        return OutboxReport(processed=len(tasks), succeeded=succeeded, failed=failed)

    def _run(self, task: OutboxTask) -> None:
        kind = task.kind
        if kind is OutboxTaskKind.CREATE_FULFILLMENT:
            self._create_fulfillment.handle(self._load_order(task))
        elif kind is OutboxTaskKind.SEND_ORDER_CONFIRMATION:
            self._notifier.send_order_confirmation(self._load_order(task))
        elif kind is OutboxTaskKind.CANCEL_FULFILLMENT:
            self._cancel_fulfillment.cancel_for_order(
                task.payload["order_id"], task.payload.get("reason")
            )
        else:
            raise ValueError(f"Unsupported outbox task kind: {kind!r}")

    def _load_order(self, task: OutboxTask) -> Order:
        order_id = task.payload["order_id"]
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order '{order_id}' not found")
        return order
