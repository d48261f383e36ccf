"""Abstract repository for OrderFulfillment aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from localmarket.domain.model.fulfillment import FulfillmentStatus, OrderFulfillment


class FulfillmentRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique fulfillment ID."""

    @abstractmethod
    def get_by_id(self, fulfillment_id: str) -> OrderFulfillment | None:
        """Return a fulfillment by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_id(self, order_id: str) -> OrderFulfillment | None:
        """Return the fulfillment created for *order_id*, or None."""

    @abstractmethod
    def list_all(self, status: FulfillmentStatus | None = None) -> list[OrderFulfillment]:
        """Return fulfillments, newest first, optionally filtered by status."""

    @abstractmethod
    def save(self, fulfillment: OrderFulfillment) -> None:
        """Persist with a conditional write.

        Raises ConcurrencyError when the stored document's version no
        longer matches ``fulfillment.version``. On success the version
        is incremented on both the stored document and *fulfillment*.
        """
