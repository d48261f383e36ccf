"""Abstract repository for Order entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from localmarket.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique order ID."""

    @abstractmethod
    def next_order_number(self, year: int) -> str:
        """Generate the next human-readable number, e.g. ``ORD-2025-0001``."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""
