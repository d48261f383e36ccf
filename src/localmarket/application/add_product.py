"""Application service: Add Product use case."""

from __future__ import annotations

import re

from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.product import Product
from localmarket.domain.model.value_objects import Money
from localmarket.domain.repository.product_repository import ProductRepository


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        vendor_id: str,
        vendor_name: str,
        stock: int,
        sale_price: str | None = None,
        unit: str | None = None,
    ) -> Product:
        """Add a new product to the catalogue."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        slug = slugify(name)
        if self._product_repo.get_by_slug(slug) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        product = Product(
            id=next_id,
            name=name.strip(),
            slug=slug,
            price=Money.of(price),
            vendor_id=vendor_id,
            vendor_name=vendor_name,
            stock=stock,
            unit=unit,
        )
        # Runs the price rules (positive price, sale below regular)
        product.update_price(
            product.price, Money.of(sale_price) if sale_price is not None else None
        )
        self._product_repo.save(product)
        return product
