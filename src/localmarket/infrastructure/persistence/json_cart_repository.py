"""JSON-file-backed implementation of CartRepository (``savedCarts``).

The owner id doubles as the document id, so an owner has at most one
saved cart. Totals are written alongside the items for admin queries
but are recomputed from the items on load.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from localmarket.domain.model.cart import Cart, CartItem
from localmarket.domain.repository.cart_repository import CartRepository
from localmarket.infrastructure.persistence.json_collection import (
    JsonCollection,
    compact,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get(self, owner_id: str) -> Cart | None:
        raw = self._collection.find(owner_id)
        return None if raw is None else self._to_domain(raw)

    def list_all(self) -> list[Cart]:
        carts = [self._to_domain(raw) for raw in self._collection.all()]
        return sorted(carts, key=lambda c: c.updated_at, reverse=True)

    def list_inactive_since(self, cutoff: datetime) -> list[Cart]:
        return [cart for cart in self.list_all() if cart.updated_at < cutoff]

    def save(self, cart: Cart) -> None:
        self._collection.upsert(self._to_raw(cart))

    def delete(self, owner_id: str) -> None:
        self._collection.delete(owner_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        subtotal, item_count = cart.totals()
        return compact({
            "id": cart.owner_id,
            "userId": cart.owner_id,
            "items": [
                compact({
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "productSlug": item.product_slug,
                    "productSku": item.product_sku,
                    "price": money_to_raw(item.price),
                    "salePrice": money_to_raw(item.sale_price),
                    "currency": item.price.currency,
                    "quantity": item.quantity,
                    "image": item.image or None,
                    "stock": item.stock,
                    "unit": item.unit,
                    "subtotal": money_to_raw(item.subtotal),
                    "vendorId": item.vendor_id,
                    "vendorName": item.vendor_name,
                })
                for item in cart.items
            ],
            "subtotal": money_to_raw(subtotal),
            "itemCount": item_count,
            "createdAt": dt_to_raw(cart.created_at),
            "updatedAt": dt_to_raw(cart.updated_at),
            "expiresAt": dt_to_raw(cart.expires_at),
        })

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = []
        for i in raw["items"]:
            currency = i.get("currency", "USD")
            items.append(
                CartItem(
                    product_id=i["productId"],
                    product_name=i["productName"],
                    product_slug=i["productSlug"],
                    product_sku=i.get("productSku"),
                    price=money_from_raw(i["price"], currency),
                    sale_price=money_from_raw(i.get("salePrice"), currency),
                    quantity=i["quantity"],
                    image=i.get("image", ""),
                    stock=i["stock"],
                    unit=i.get("unit"),
                    vendor_id=i.get("vendorId", ""),
                    vendor_name=i.get("vendorName", ""),
                )
            )
        return Cart(
            owner_id=raw["id"],
            items=items,
            created_at=dt_from_raw(raw["createdAt"]),
            updated_at=dt_from_raw(raw["updatedAt"]),
            expires_at=dt_from_raw(raw.get("expiresAt")),
        )
