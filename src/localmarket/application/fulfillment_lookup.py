"""Shared loading for the fulfillment use cases."""

from __future__ import annotations

from localmarket.domain.exceptions import NotFoundError
from localmarket.domain.model.fulfillment import OrderFulfillment
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository


def load_fulfillment(repo: FulfillmentRepository, fulfillment_id: str) -> OrderFulfillment:
    fulfillment = repo.get_by_id(fulfillment_id)
    if fulfillment is None:
        raise NotFoundError(f"Fulfillment '{fulfillment_id}' not found")
    return fulfillment
