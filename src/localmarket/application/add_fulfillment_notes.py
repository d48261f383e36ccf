"""Application service: Add Fulfillment Notes use case."""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.model.actor import Actor
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_view

logger = structlog.get_logger(__name__)


class AddFulfillmentNotesHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository, clock: Clock = utc_now) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(self, fulfillment_id: str, notes: str, actor: Actor) -> None:
        """Attach notes to any fulfillment, including closed ones.

        Notes are an annotation on the audit trail, so any staff member
        may add them regardless of who is picking the order.
        """
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        ensure_can_view(actor)

        fulfillment.add_notes(notes, self._clock())
        self._fulfillment_repo.save(fulfillment)
        logger.info("Fulfillment notes updated", fulfillment_id=fulfillment.id, by=actor.id)
