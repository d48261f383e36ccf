"""Application service: Update Fulfillment Item use case.

Records what a picker found for one product. The aggregate starts the
fulfillment on the first processed item and completes it once every
item is fully added.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import FulfillmentDTO
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.model.actor import Actor
from localmarket.domain.model.fulfillment import ItemFulfillmentStatus
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_modify

logger = structlog.get_logger(__name__)


class UpdateFulfillmentItemHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository, clock: Clock = utc_now) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(
        self,
        fulfillment_id: str,
        product_id: str,
        quantity_fulfilled: int,
        status: ItemFulfillmentStatus,
        actor: Actor,
        notes: str | None = None,
    ) -> FulfillmentDTO:
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        ensure_can_modify(actor, fulfillment)

        previous_status = fulfillment.status
        fulfillment.process_item(
            product_id=product_id,
            quantity_fulfilled=quantity_fulfilled,
            status=status,
            actor=actor,
            now=self._clock(),
            notes=notes,
        )
        self._fulfillment_repo.save(fulfillment)

        logger.info(
            "Fulfillment item processed",
            fulfillment_id=fulfillment.id,
            product_id=product_id,
            item_status=status.value,
            quantity_fulfilled=quantity_fulfilled,
            processed_by=actor.id,
            progress=fulfillment.progress,
        )
        if fulfillment.status != previous_status:
            logger.info(
                "Fulfillment status changed",
                fulfillment_id=fulfillment.id,
                previous_status=previous_status.value,
                status=fulfillment.status.value,
            )
        return FulfillmentDTO.from_fulfillment(fulfillment)
