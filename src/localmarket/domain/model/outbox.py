"""Outbox tasks — side effects queued behind a committed write.

Payment confirmation and order cancellation must never fail because a
follow-up (creating the picking checklist, emailing the customer) fails.
Those follow-ups are written to the outbox instead and processed later,
where a failure is recorded on the task rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from localmarket.domain.exceptions import ValidationError


class OutboxTaskKind(Enum):
    CREATE_FULFILLMENT = "create_fulfillment"
    CANCEL_FULFILLMENT = "cancel_fulfillment"
    SEND_ORDER_CONFIRMATION = "send_order_confirmation"


class OutboxTaskStatus(Enum):
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


@dataclass
class OutboxTask:
    id: str
    kind: OutboxTaskKind
    payload: dict[str, str]
    status: OutboxTaskStatus = OutboxTaskStatus.PENDING
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    processed_at: datetime | None = None

    def mark_done(self, now: datetime) -> None:
        if self.status != OutboxTaskStatus.PENDING:
            raise ValidationError(f"Outbox task {self.id} is already {self.status.value}")
        self.attempts += 1
        self.status = OutboxTaskStatus.DONE
        self.last_error = None
        self.processed_at = now

    def record_failure(self, error: str, now: datetime, max_attempts: int) -> None:
        """Count a failed attempt; give up after *max_attempts*."""
        if self.status != OutboxTaskStatus.PENDING:
            raise ValidationError(f"Outbox task {self.id} is already {self.status.value}")
        self.attempts += 1
        self.last_error = error
        self.processed_at = now
        if self.attempts >= max_attempts:
            self.status = OutboxTaskStatus.FAILED
