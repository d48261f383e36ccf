"""Application service: Remove From Cart use case.

Removing a product that is not in the cart is a no-op. A cart left
with no lines is deleted from the store.
"""

from __future__ import annotations

from datetime import timedelta

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import CartDTO
from localmarket.domain.model.cart import Cart
from localmarket.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class RemoveFromCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        cart_ttl: timedelta | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._cart_ttl = cart_ttl
        self._clock = clock

    def handle(self, owner_id: str, product_id: str) -> CartDTO:
        cart = self._cart_repo.get(owner_id)
        if cart is None:
            return CartDTO.from_cart(Cart(owner_id=owner_id))

        cart.remove_item(product_id)
        if cart.is_empty:
            self._cart_repo.delete(owner_id)
        else:
            cart.touch(self._clock(), self._cart_ttl)
            self._cart_repo.save(cart)

        logger.info("Item removed from cart", owner_id=owner_id, product_id=product_id)
        return CartDTO.from_cart(cart)
