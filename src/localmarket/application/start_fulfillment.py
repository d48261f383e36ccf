"""Application service: Start Fulfillment use case."""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import FulfillmentDTO
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.model.actor import Actor
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_modify

logger = structlog.get_logger(__name__)


class StartFulfillmentHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository, clock: Clock = utc_now) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(self, fulfillment_id: str, actor: Actor) -> FulfillmentDTO:
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        ensure_can_modify(actor, fulfillment)

        fulfillment.start(actor, self._clock())
        self._fulfillment_repo.save(fulfillment)

        logger.info(
            "Fulfillment started",
            fulfillment_id=fulfillment.id,
            order_number=fulfillment.order_number,
            started_by=actor.id,
        )
        return FulfillmentDTO.from_fulfillment(fulfillment)
