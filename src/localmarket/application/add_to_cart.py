"""Application service: Add To Cart use case."""

from __future__ import annotations

from datetime import timedelta

import structlog

from localmarket.application.clock import Clock, utc_now
from localmarket.application.dto import CartDTO
from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.model.cart import Cart
from localmarket.domain.repository.cart_repository import CartRepository
from localmarket.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

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

    def handle(self, owner_id: str, product_id: str, quantity: int = 1) -> CartDTO:
        """Add a product to the owner's cart, merging into an existing line.

        The cart aggregate does not know about live stock, so the
        stock ceiling is enforced here before anything is written.
        """
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        if not product.is_active:
            raise ValidationError(f"{product.name} is no longer available")

        now = self._clock()
        cart = self._cart_repo.get(owner_id) or Cart(owner_id=owner_id, created_at=now)

        existing = cart.find_item(product.id)
        already = existing.quantity if existing is not None else 0
        if already + quantity > product.stock:
            raise ValidationError(
                f"Only {product.stock} of {product.name} in stock "
                f"(cart has {already}, requested {quantity} more)"
            )

        cart.add_item(product, quantity)
        cart.touch(now, self._cart_ttl)
        self._cart_repo.save(cart)

        logger.info(
            "Item added to cart",
            owner_id=owner_id,
            product_id=product.id,
            quantity=quantity,
            item_count=cart.item_count,
        )
        return CartDTO.from_cart(cart)
