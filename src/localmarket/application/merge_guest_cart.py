"""Application service: Merge Guest Cart use case.

Runs when a shopper signs in: lines collected under the guest session
are folded into the user's saved cart, quantities adding up for
products present in both, and the guest cart is discarded.
"""

from __future__ import annotations

from datetime import timedelta

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import CartDTO
from localmarket.domain.model.cart import Cart
from localmarket.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class MergeGuestCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        cart_ttl: timedelta | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._cart_ttl = cart_ttl
        self._clock = clock

    def handle(self, guest_id: str, user_id: str) -> CartDTO:
        now = self._clock()
        guest = self._cart_repo.get(guest_id)
        cart = self._cart_repo.get(user_id) or Cart(owner_id=user_id, created_at=now)

        if guest is None or guest.is_empty:
            return CartDTO.from_cart(cart)

        cart.merge(guest.items)
        cart.touch(now, self._cart_ttl)
        self._cart_repo.save(cart)
        self._cart_repo.delete(guest_id)

        logger.info(
            "Guest cart merged",
            guest_id=guest_id,
            user_id=user_id,
            merged_lines=guest.unique_item_count,
        )
        return CartDTO.from_cart(cart)
