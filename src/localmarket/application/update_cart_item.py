"""Application service: Update Cart Item Quantity use case.

A quantity below 1 removes the line rather than being rejected, and a
cart left with no lines is deleted from the store. The stock ceiling is
checked against the live product, as when adding.
"""

from __future__ import annotations

from datetime import timedelta

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import CartDTO
from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.repository.cart_repository import CartRepository
from localmarket.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        cart_ttl: timedelta | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._cart_ttl = cart_ttl
        self._clock = clock

    def handle(self, owner_id: str, product_id: str, quantity: int) -> CartDTO:
        cart = self._cart_repo.get(owner_id)
        if cart is None:
            raise NotFoundError(f"Cart for '{owner_id}' not found")

        item = cart.find_item(product_id)
        if item is not None and quantity >= 1:
            product = self._product_repo.get_by_id(product_id)
            if product is None or not product.is_active:
                raise ValidationError(f"{item.product_name} is no longer available")
            if quantity > product.stock:
                raise ValidationError(
                    f"Only {product.stock} of {product.name} in stock"
                )
            item.stock = product.stock

        cart.update_quantity(product_id, quantity)
        if cart.is_empty:
            self._cart_repo.delete(owner_id)
        else:
            cart.touch(self._clock(), self._cart_ttl)
            self._cart_repo.save(cart)

        logger.info(
            "Cart quantity updated",
            owner_id=owner_id,
            product_id=product_id,
            quantity=quantity,
            removed=quantity < 1,
        )
        return CartDTO.from_cart(cart)
