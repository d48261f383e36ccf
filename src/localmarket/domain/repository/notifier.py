"""Port for the notification dispatcher (transactional email)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from localmarket.domain.model.order import Order


class Notifier(ABC):

    @abstractmethod
    def send_order_confirmation(self, order: Order) -> None:
        """Tell the customer their order was received and paid.

        Raises on delivery failure; the outbox records and retries it.
        """
