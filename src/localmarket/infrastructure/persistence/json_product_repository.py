"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from localmarket.domain.model.product import Product
from localmarket.domain.repository.product_repository import ProductRepository
from localmarket.infrastructure.persistence.json_collection import (
    JsonCollection,
    compact,
    money_from_raw,
    money_to_raw,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._collection.find(product_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_slug(self, slug: str) -> Product | None:
        for raw in self._collection.all():
            if raw["slug"] == slug:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._collection.all()]

    def save(self, product: Product) -> None:
        self._collection.upsert(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return compact({
            "id": product.id,
            "name": product.name,
            "slug": product.slug,
            "price": money_to_raw(product.price),
            "salePrice": money_to_raw(product.sale_price),
            "currency": product.price.currency,
            "stock": product.stock,
            "unit": product.unit,
            "sku": product.sku,
            "images": product.images,
            "vendorId": product.vendor_id,
            "vendorName": product.vendor_name,
            "isActive": product.is_active,
        })

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        return Product(
            id=raw["id"],
            name=raw["name"],
            slug=raw["slug"],
            price=money_from_raw(raw["price"], currency),
            sale_price=money_from_raw(raw.get("salePrice"), currency),
            stock=raw.get("stock", 0),
            unit=raw.get("unit"),
            sku=raw.get("sku"),
            images=list(raw.get("images", [])),
            vendor_id=raw["vendorId"],
            vendor_name=raw["vendorName"],
            is_active=raw.get("isActive", True),
        )
