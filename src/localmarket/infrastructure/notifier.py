"""Notification dispatcher that records confirmations in the log.

Rendering and delivering the actual email belongs to the hosted mail
provider; this adapter marks the hand-off point.
"""

from __future__ import annotations

import structlog

from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.order import Order
from localmarket.domain.repository.notifier import Notifier

logger = structlog.get_logger(__name__)


class LoggingNotifier(Notifier):

    def send_order_confirmation(self, order: Order) -> None:
        if not order.customer_email:
            raise ValidationError(
                f"Order {order.order_number} has no customer email address"
            )
        logger.info(
            "Order confirmation dispatched",
            order_id=order.id,
            order_number=order.order_number,
            to=order.customer_email,
            subtotal=str(order.subtotal),
        )
