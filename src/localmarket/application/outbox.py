"""Helper for enqueuing best-effort side effects."""

from __future__ import annotations

from datetime import datetime

import structlog

from localmarket.domain.model.outbox import OutboxTask, OutboxTaskKind
from localmarket.domain.repository.outbox_repository import OutboxRepository

logger = structlog.get_logger(__name__)


def enqueue(
    outbox_repo: OutboxRepository,
    kind: OutboxTaskKind,
    payload: dict[str, str],
    now: datetime,
) -> OutboxTask:
    task = OutboxTask(
        id=outbox_repo.next_id(),
        kind=kind,
        payload=payload,
        created_at=now,
    )
    outbox_repo.save(task)
    logger.info("Outbox task enqueued", task_id=task.id, kind=kind.value, **payload)
    return task
