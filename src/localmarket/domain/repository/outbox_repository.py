"""Abstract repository for queued side effects."""

from __future__ import annotations

from abc import ABC, abstractmethod

from localmarket.domain.model.outbox import OutboxTask


class OutboxRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a unique task ID."""

    @abstractmethod
    def list_pending(self) -> list[OutboxTask]:
        """Return PENDING tasks in the order they were enqueued."""

    @abstractmethod
    def list_all(self) -> list[OutboxTask]:
        """Return every task in the order they were enqueued."""

    @abstractmethod
    def save(self, task: OutboxTask) -> None:
        """Persist a new or updated task."""
