"""Application service: Create Order Fulfillment use case.

Builds the picking checklist for a paid order. Exactly one fulfillment
exists per order; asking again returns the record already stored. An
order cancelled before its checklist was built never gets one.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import FulfillmentDTO
from localmarket.domain.model.fulfillment import OrderFulfillment
from localmarket.domain.model.order import Order, OrderStatus
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository

logger = structlog.get_logger(__name__)


class CreateOrderFulfillmentHandler:

    def __init__(
        self,
        fulfillment_repo: FulfillmentRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._fulfillment_repo = fulfillment_repo
        self._clock = clock

    def handle(self, order: Order) -> FulfillmentDTO | None:
        """Return the order's fulfillment, or None for a cancelled order."""
        existing = self._fulfillment_repo.get_by_order_id(order.id)
        if existing is not None:
            logger.info(
                "Fulfillment already exists for order",
                fulfillment_id=existing.id,
                order_id=order.id,
            )
            return FulfillmentDTO.from_fulfillment(existing)

        if order.status is OrderStatus.CANCELLED:
            logger.info(
                "Order cancelled before fulfillment was created, skipping",
                order_id=order.id,
                order_number=order.order_number,
            )
            return None

        fulfillment = OrderFulfillment.create_from_order(
            self._fulfillment_repo.next_id(), order, self._clock()
        )
        self._fulfillment_repo.save(fulfillment)

        logger.info(
            "Fulfillment created",
            fulfillment_id=fulfillment.id,
            order_id=order.id,
            order_number=order.order_number,
            total_items_ordered=fulfillment.total_items_ordered,
        )
        return FulfillmentDTO.from_fulfillment(fulfillment)
