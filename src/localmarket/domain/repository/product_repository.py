"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON document store,
in-memory fakes) live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from localmarket.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return a product by its URL slug, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalogue."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
