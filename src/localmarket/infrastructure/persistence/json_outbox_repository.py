"""JSON-file-backed implementation of OutboxRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from localmarket.domain.model.outbox import OutboxTask, OutboxTaskKind, OutboxTaskStatus
from localmarket.domain.repository.outbox_repository import OutboxRepository
from localmarket.infrastructure.persistence.json_collection import (
    JsonCollection,
    compact,
    dt_from_raw,
    dt_to_raw,
)


class JsonOutboxRepository(OutboxRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def list_pending(self) -> list[OutboxTask]:
        return [t for t in self.list_all() if t.status == OutboxTaskStatus.PENDING]

    def list_all(self) -> list[OutboxTask]:
        # Documents are appended on first save, so file order is enqueue order.
        return [self._to_domain(raw) for raw in self._collection.all()]

    def save(self, task: OutboxTask) -> None:
        self._collection.upsert(self._to_raw(task))

    @staticmethod
    def _to_raw(task: OutboxTask) -> dict:
        return compact({
            "id": task.id,
            "kind": task.kind.value,
            "payload": task.payload,
            "status": task.status.value,
            "attempts": task.attempts,
            "lastError": task.last_error,
            "createdAt": dt_to_raw(task.created_at),
            "processedAt": dt_to_raw(task.processed_at),
        })

    @staticmethod
    def _to_domain(raw: dict) -> OutboxTask:
        return OutboxTask(
            id=raw["id"],
            kind=OutboxTaskKind(raw["kind"]),
            payload=dict(raw["payload"]),
            status=OutboxTaskStatus(raw["status"]),
            attempts=raw.get("attempts", 0),
            last_error=raw.get("lastError"),
            created_at=dt_from_raw(raw["createdAt"]),
            processed_at=dt_from_raw(raw.get("processedAt")),
        )
