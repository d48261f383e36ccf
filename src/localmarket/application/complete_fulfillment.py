"""Application service: Complete Fulfillment use case (manual close)."""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import FulfillmentDTO
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.model.actor import Actor
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_modify

logger = structlog.get_logger(__name__)


class CompleteFulfillmentHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository, clock: Clock = utc_now) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(
        self, fulfillment_id: str, actor: Actor, notes: str | None = None
    ) -> FulfillmentDTO:
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        ensure_can_modify(actor, fulfillment)

        fulfillment.complete(actor, self._clock(), notes)
        self._fulfillment_repo.save(fulfillment)

        logger.info(
            "Fulfillment completed",
            fulfillment_id=fulfillment.id,
            completed_by=actor.id,
            total_items_fulfilled=fulfillment.total_items_fulfilled,
            total_items_ordered=fulfillment.total_items_ordered,
        )
        return FulfillmentDTO.from_fulfillment(fulfillment)
