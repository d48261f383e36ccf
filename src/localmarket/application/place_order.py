"""Application service: Place Order use case.

Turns the shopper's saved cart into a PENDING order with a price
snapshot. The cart is left in place until the payment provider
confirms payment, so an abandoned checkout loses nothing.
"""

from __future__ import annotations

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import OrderDTO
from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.model.order import Order
from localmarket.domain.repository.cart_repository import CartRepository
from localmarket.domain.repository.order_repository import OrderRepository
from localmarket.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, customer_id: str, customer_name: str, customer_email: str) -> OrderDTO:
        """Place an order for everything in the customer's cart.

        Steps:
        1. Load the cart (fail if there is none or it is empty).
        2. Re-check every line against live stock.
        3. Snapshot the cart into an Order and persist it.
        """
        cart = self._cart_repo.get(customer_id)
        if cart is None or cart.is_empty:
            raise ValidationError("Cannot place an order from an empty cart")

        for line in cart.items:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None or not product.is_active:
                raise NotFoundError(f"{line.product_name} is no longer available")
            if line.quantity > product.stock:
                raise ValidationError(
                    f"Only {product.stock} of {product.name} left in stock "
                    f"(cart has {line.quantity})"
                )

        now = self._clock()
        order = Order.from_cart(
            order_id=self._order_repo.next_id(),
            order_number=self._order_repo.next_order_number(now.year),
            cart=cart,
            customer_name=customer_name,
            customer_email=customer_email,
        )
        order.created_at = now
        order.updated_at = now
        self._order_repo.save(order)

        logger.info(
            "Order placed",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=customer_id,
            subtotal=str(order.subtotal),
        )
        return OrderDTO.from_order(order)
