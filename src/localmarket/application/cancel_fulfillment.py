"""Application service: Cancel Fulfillment use case.

Staff cancel a specific record through ``handle``. Order cancellation
arrives through the outbox and uses ``cancel_for_order``, which
tolerates a missing record and one that was already closed.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.model.actor import Actor
from localmarket.domain.model.fulfillment import CANCELLABLE_STATUSES
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_modify

logger = structlog.get_logger(__name__)


class CancelFulfillmentHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository, clock: Clock = utc_now) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(self, fulfillment_id: str, actor: Actor, reason: str | None = None) -> None:
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        ensure_can_modify(actor, fulfillment)

        fulfillment.cancel(self._clock(), reason)
        self._fulfillment_repo.save(fulfillment)
        logger.info(
            "Fulfillment cancelled",
            fulfillment_id=fulfillment.id,
            cancelled_by=actor.id,
            reason=reason,
        )

    def cancel_for_order(self, order_id: str, reason: str | None = None) -> bool:
        """Cancel the fulfillment of a cancelled order, if still possible."""
        fulfillment = self._fulfillment_repo.get_by_order_id(order_id)
        if fulfillment is None:
            logger.info("No fulfillment found for cancelled order", order_id=order_id)
            return False

        if fulfillment.status not in CANCELLABLE_STATUSES:
            logger.warning(
                "Cannot cancel fulfillment — already closed",
                fulfillment_id=fulfillment.id,
                order_id=order_id,
                status=fulfillment.status.value,
            )
            return False

        fulfillment.cancel(self._clock(), reason or "Order cancelled")
        self._fulfillment_repo.save(fulfillment)
        logger.info(
            "Fulfillment cancelled due to order cancellation",
            fulfillment_id=fulfillment.id,
            order_id=order_id,
        )
        return True
