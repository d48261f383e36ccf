"""Application service: fulfillment queries for the back office."""

from __future__ import annotations

from localmarket.application.dto import FulfillmentDTO
from localmarket.application.fulfillment_lookup import load_fulfillment
from localmarket.domain.exceptions import NotFoundError
from localmarket.domain.model.actor import Actor
from localmarket.domain.model.fulfillment import FulfillmentStatus
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.domain.service.authorization import ensure_can_view


class ShowFulfillmentHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository) -> None:
        self._fulfillment_repo = fulfillment_repo

    def handle(self, fulfillment_id: str, actor: Actor) -> FulfillmentDTO:
        ensure_can_view(actor)
        fulfillment = load_fulfillment(self._fulfillment_repo, fulfillment_id)
        return FulfillmentDTO.from_fulfillment(fulfillment)

    def by_order(self, order_id: str, actor: Actor) -> FulfillmentDTO:
        ensure_can_view(actor)
        fulfillment = self._fulfillment_repo.get_by_order_id(order_id)
        if fulfillment is None:
            raise NotFoundError(f"No fulfillment for order '{order_id}'")
        return FulfillmentDTO.from_fulfillment(fulfillment)


class ListFulfillmentsHandler:

    def __init__(self, fulfillment_repo: FulfillmentRepository) -> None:
        self._fulfillment_repo = fulfillment_repo

    def handle(
        self, actor: Actor, status: FulfillmentStatus | None = None
    ) -> list[FulfillmentDTO]:
        ensure_can_view(actor)
        return [
            FulfillmentDTO.from_fulfillment(f)
            for f in self._fulfillment_repo.list_all(status)
        ]
