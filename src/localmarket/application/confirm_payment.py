"""Application service: Confirm Payment use case.

Glue for the payment provider's "checkout completed" webhook. Marking
the order paid is the primary write, and the fulfillment checklist and
confirmation email are enqueued in the outbox right behind it. Stock
decrements and clearing the cart are bookkeeping: a failure there is
logged and never blocks the fulfillment.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.outbox import enqueue
from localmarket.domain.exceptions import NotFoundError, PersistenceError
from localmarket.domain.model.order import Order
from localmarket.domain.model.outbox import OutboxTaskKind
from localmarket.domain.repository.cart_repository import CartRepository
from localmarket.domain.repository.order_repository import OrderRepository
from localmarket.domain.repository.outbox_repository import OutboxRepository
from localmarket.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class ConfirmPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        outbox_repo: OutboxRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._cart_repo = cart_repo
        self._outbox_repo = outbox_repo
        self._clock = clock

    def handle(self, order_id: str, payment_reference: str) -> bool:
        """Record the payment. Returns False when it was already recorded.

        Payment providers redeliver webhooks, so a second confirmation
        for a paid order is acknowledged without doing anything.

        Steps:
        1. Mark the order paid and persist it.
        2. Enqueue CREATE_FULFILLMENT and SEND_ORDER_CONFIRMATION.
        3. Best effort: decrement stock and delete the customer's cart.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order '{order_id}' not found")

        if order.is_paid:
            logger.info(
                "Payment already recorded, ignoring duplicate confirmation",
                order_id=order.id,
                payment_reference=payment_reference,
            )
            return False

        now = self._clock()
        order.mark_paid(payment_reference, now)
        self._order_repo.save(order)
        logger.info(
            "Payment confirmed",
            order_id=order.id,
            order_number=order.order_number,
            payment_reference=payment_reference,
        )

        payload = {"order_id": order.id}
        enqueue(self._outbox_repo, OutboxTaskKind.CREATE_FULFILLMENT, payload, now)
        enqueue(self._outbox_repo, OutboxTaskKind.SEND_ORDER_CONFIRMATION, payload, now)

        self._decrement_stock(order)
        self._clear_cart(order)
        return True

    def _decrement_stock(self, order: Order) -> None:
        for line in order.items:
            try:
                product = self._product_repo.get_by_id(line.product_id)
                if product is None:
                    logger.warning(
                        "Cannot decrement stock for missing product",
                        order_id=order.id,
                        product_id=line.product_id,
                    )
                    continue
                product.decrement_stock(line.quantity)
                self._product_repo.save(product)
            except PersistenceError as exc:
                logger.warning(
                    "Stock decrement failed",
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    error=str(exc),
                )

    def _clear_cart(self, order: Order) -> None:
        try:
            self._cart_repo.delete(order.customer_id)
        except PersistenceError as exc:
            logger.warning(
                "Cart cleanup after payment failed",
                order_id=order.id,
                customer_id=order.customer_id,
                error=str(exc),
            )
