"""Abstract repository for saved carts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from localmarket.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get(self, owner_id: str) -> Cart | None:
        """Return the cart saved for *owner_id*, or None."""

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every saved cart, most recently updated first."""

    @abstractmethod
    def list_inactive_since(self, cutoff: datetime) -> list[Cart]:
        """Return carts last updated before *cutoff*, most recent first."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart (last writer wins)."""

    @abstractmethod
    def delete(self, owner_id: str) -> None:
        """Remove the cart for *owner_id*; a missing cart is not an error."""
