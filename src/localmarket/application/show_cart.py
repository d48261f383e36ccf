"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from localmarket.application.dto import CartDTO
from localmarket.domain.model.cart import Cart
from localmarket.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str) -> CartDTO:
        cart = self._cart_repo.get(owner_id) or Cart(owner_id=owner_id)
        return CartDTO.from_cart(cart)
