"""Application service: Clear Cart use case (used after checkout)."""

from __future__ import annotations

import structlog

from localmarket.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str) -> None:
        if self._cart_repo.get(owner_id) is None:
            return
        self._cart_repo.delete(owner_id)
        logger.info("Cart cleared", owner_id=owner_id)
