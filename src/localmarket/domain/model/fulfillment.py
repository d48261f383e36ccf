"""OrderFulfillment aggregate — the picking checklist for one order.

A fulfillment is created once per order, right after payment, from a
snapshot of the order's line items. Staff then work through the items
one by one; the record tracks progress independently of the order's
payment status and is never deleted.

Lifecycle::

    PENDING ──start / first item──▶ IN_PROGRESS ──all items ADDED──▶ COMPLETED
       │                                │
       └────────────cancel──────────────┴──────▶ CANCELLED

COMPLETED and CANCELLED are terminal: nothing on the record may change
afterwards except free-text notes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.model.actor import Actor
from localmarket.domain.model.order import Order
from localmarket.domain.model.pricing import percent
from localmarket.domain.model.value_objects import Money


class FulfillmentStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str) -> FulfillmentStatus:
        try:
            return cls(raw)
        except ValueError as exc:
            raise ValidationError(f"Unknown fulfillment status: {raw!r}") from exc


class ItemFulfillmentStatus(Enum):
    PENDING = "pending"
    ADDED = "added"
    OUT_OF_STOCK = "out_of_stock"
    PARTIAL = "partial"

    @classmethod
    def parse(cls, raw: str) -> ItemFulfillmentStatus:
        try:
            return cls(raw)
        except ValueError as exc:
            raise ValidationError(f"Unknown item fulfillment status: {raw!r}") from exc


TERMINAL_STATUSES = frozenset({FulfillmentStatus.COMPLETED, FulfillmentStatus.CANCELLED})
CANCELLABLE_STATUSES = frozenset({FulfillmentStatus.PENDING, FulfillmentStatus.IN_PROGRESS})


@dataclass
class FulfillmentItem:
    """One line of the picking checklist.

    ``quantity_ordered`` is fixed at creation; ``quantity_fulfilled`` moves
    as staff pick the product and always stays within
    ``[0, quantity_ordered]``.
    """

    product_id: str
    product_name: str
    quantity_ordered: int
    unit_price: Money
    quantity_fulfilled: int = 0
    status: ItemFulfillmentStatus = ItemFulfillmentStatus.PENDING
    product_image: str | None = None
    sku: str | None = None
    notes: str | None = None
    processed_by: str | None = None
    processed_by_name: str | None = None
    processed_at: datetime | None = None

    @property
    def is_fulfilled(self) -> bool:
        return (
            self.status == ItemFulfillmentStatus.ADDED
            and self.quantity_fulfilled == self.quantity_ordered
        )

    def record(
        self,
        quantity_fulfilled: int,
        status: ItemFulfillmentStatus,
        actor: Actor,
        now: datetime,
        notes: str | None = None,
    ) -> None:
        """Record the picking outcome for this line and stamp the picker."""
        _check_outcome(self, quantity_fulfilled, status)
        self.quantity_fulfilled = quantity_fulfilled
        self.status = status
        if notes:
            self.notes = notes
        self.processed_by = actor.id
        self.processed_by_name = actor.name
        self.processed_at = now


def _check_outcome(
    item: FulfillmentItem, quantity: int, status: ItemFulfillmentStatus
) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Fulfilled quantity must be an integer")
    if quantity < 0:
        raise ValidationError("Fulfilled quantity cannot be negative")
    if quantity > item.quantity_ordered:
        raise ValidationError(
            f"Cannot fulfill {quantity} of {item.product_name} "
            f"— only {item.quantity_ordered} ordered"
        )

    if status is ItemFulfillmentStatus.ADDED:
        if quantity != item.quantity_ordered:
            raise ValidationError(
                f"ADDED requires the full quantity ({item.quantity_ordered}) "
                f"of {item.product_name}, got {quantity}"
            )
    elif status is ItemFulfillmentStatus.OUT_OF_STOCK:
        if quantity != 0:
            raise ValidationError("OUT_OF_STOCK items must have a fulfilled quantity of 0")
    elif status is ItemFulfillmentStatus.PARTIAL:
        if not 0 < quantity < item.quantity_ordered:
            raise ValidationError(
                f"PARTIAL requires between 1 and {item.quantity_ordered - 1} "
                f"of {item.product_name}, got {quantity}"
            )
    elif status is ItemFulfillmentStatus.PENDING:
        raise ValidationError("An item cannot be moved back to PENDING")
    else:
        raise ValidationError(f"Unsupported item status: {status!r}")


# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------


def calculate_total_items_ordered(items: Iterable[FulfillmentItem]) -> int:
    return sum(item.quantity_ordered for item in items)


def calculate_total_items_fulfilled(items: Iterable[FulfillmentItem]) -> int:
    return sum(item.quantity_fulfilled for item in items)


def is_fully_fulfilled(items: list[FulfillmentItem]) -> bool:
    """True when every item is ADDED with its full quantity."""
    return all(item.is_fulfilled for item in items)


def get_fulfillment_progress(items: list[FulfillmentItem]) -> int:
    """Percentage of ordered units picked so far (0 for an empty list)."""
    return percent(
        calculate_total_items_fulfilled(items),
        calculate_total_items_ordered(items),
    )


@dataclass
class OrderFulfillment:
    """Aggregate root for order picking.

    Use ``OrderFulfillment.create_from_order()`` for new records. The
    ``__init__`` stays plain so repositories can reconstitute documents.
    ``version`` backs the repositories' conditional write and is only
    ever bumped by a repository.
    """

    id: str
    order_id: str
    order_number: str
    customer_id: str
    customer_name: str
    items: list[FulfillmentItem]
    status: FulfillmentStatus = FulfillmentStatus.PENDING
    started_by: str | None = None
    started_by_name: str | None = None
    started_at: datetime | None = None
    completed_by: str | None = None
    completed_by_name: str | None = None
    completed_at: datetime | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create_from_order(fulfillment_id: str, order: Order, now: datetime) -> OrderFulfillment:
        """Snapshot *order*'s lines into a fresh PENDING checklist.

        Later edits to the order never reach the fulfillment.
        """
        if not order.items:
            raise ValidationError(f"Order {order.order_number} has no items to fulfill")

        items = [
            FulfillmentItem(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity_ordered=line.quantity,
                unit_price=line.price,
                product_image=line.product_image or None,
                sku=line.product_sku or None,
            )
            for line in order.items
        ]
        return OrderFulfillment(
            id=fulfillment_id,
            order_id=order.id,
            order_number=order.order_number,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            items=items,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def start(self, actor: Actor, now: datetime) -> None:
        """PENDING -> IN_PROGRESS, stamping who picked the order up."""
        self._assert_not_terminal()
        if self.status != FulfillmentStatus.PENDING:
            raise ValidationError(
                f"Fulfillment for order {self.order_number} is already "
                f"{self.status.value}"
            )
        self.status = FulfillmentStatus.IN_PROGRESS
        self.started_by = actor.id
        self.started_by_name = actor.name
        self.started_at = now
        self.updated_at = now

    def process_item(
        self,
        product_id: str,
        quantity_fulfilled: int,
        status: ItemFulfillmentStatus,
        actor: Actor,
        now: datetime,
        notes: str | None = None,
    ) -> FulfillmentItem:
        """Record the outcome for one product.

        Starts a PENDING fulfillment implicitly and completes it once
        every item is fully ADDED. Items may be re-processed (e.g. a
        PARTIAL line topped up to ADDED) until the record is terminal.
        """
        self._assert_not_terminal()
        item = self._find_item(product_id)
        item.record(quantity_fulfilled, status, actor, now, notes)

        if self.status == FulfillmentStatus.PENDING:
            self.start(actor, now)

        if is_fully_fulfilled(self.items):
            self._mark_completed(actor, now)

        self.updated_at = now
        return item

    def complete(self, actor: Actor, now: datetime, notes: str | None = None) -> None:
        """Close an IN_PROGRESS fulfillment by hand.

        Short picks (PARTIAL / OUT_OF_STOCK lines) are allowed, but every
        line must have been looked at.
        """
        self._assert_not_terminal()
        if self.status != FulfillmentStatus.IN_PROGRESS:
            raise ValidationError(
                f"Cannot complete fulfillment in {self.status.value} status"
            )
        pending = [i.product_name for i in self.items if i.status == ItemFulfillmentStatus.PENDING]
        if pending:
            raise ValidationError(
                "Cannot complete fulfillment — items still pending: " + ", ".join(pending)
            )
        if notes:
            self.notes = notes
        self._mark_completed(actor, now)

    def cancel(self, now: datetime, reason: str | None = None) -> None:
        if self.status not in CANCELLABLE_STATUSES:
            raise ValidationError(
                f"Cannot cancel fulfillment in {self.status.value} status"
            )
        self.status = FulfillmentStatus.CANCELLED
        if reason:
            self.notes = reason
        self.updated_at = now

    def add_notes(self, notes: str, now: datetime) -> None:
        if not notes or not notes.strip():
            raise ValidationError("Notes cannot be empty")
        self.notes = notes.strip()
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def total_items_ordered(self) -> int:
        return calculate_total_items_ordered(self.items)

    @property
    def total_items_fulfilled(self) -> int:
        return calculate_total_items_fulfilled(self.items)

    @property
    def progress(self) -> int:
        return get_fulfillment_progress(self.items)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # --- Internal helpers -----------------------------------------------------

    def _mark_completed(self, actor: Actor, now: datetime) -> None:
        self.status = FulfillmentStatus.COMPLETED
        self.completed_by = actor.id
        self.completed_by_name = actor.name
        self.completed_at = now
        self.updated_at = now

    def _assert_not_terminal(self) -> None:
        if self.is_terminal:
            raise ValidationError(
                f"Fulfillment for order {self.order_number} is "
                f"{self.status.value} and can no longer be changed"
            )

    def _find_item(self, product_id: str) -> FulfillmentItem:
        for item in self.items:
            if item.product_id == product_id:
                return item
        raise NotFoundError(
            f"Product '{product_id}' is not part of order {self.order_number}"
        )
