"""Application service: Cancel Order use case.

The fulfillment checklist is cancelled through the outbox so that a
missing or already-completed fulfillment never blocks the order
cancellation itself.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.outbox import enqueue
from localmarket.domain.exceptions import NotFoundError
from localmarket.domain.model.outbox import OutboxTaskKind
from localmarket.domain.repository.order_repository import OrderRepository
from localmarket.domain.repository.outbox_repository import OutboxRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        outbox_repo: OutboxRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._outbox_repo = outbox_repo
        self._clock = clock

    def handle(self, order_id: str, reason: str | None = None) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order '{order_id}' not found")

        now = self._clock()
        order.cancel(now, reason)
        self._order_repo.save(order)
        logger.info("Order cancelled", order_id=order.id, reason=reason)

        payload = {"order_id": order.id}
        if reason:
            payload["reason"] = reason
        enqueue(self._outbox_repo, OutboxTaskKind.CANCEL_FULFILLMENT, payload, now)
