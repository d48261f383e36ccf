"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from localmarket.domain.model.order import Order, OrderLineItem, OrderStatus, PaymentStatus
from localmarket.domain.repository.order_repository import OrderRepository
from localmarket.infrastructure.persistence.json_collection import (
    JsonCollection,
    compact,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def next_order_number(self, year: int) -> str:
        prefix = f"ORD-{year}-"
        sequence = [
            int(raw["orderNumber"][len(prefix):])
            for raw in self._collection.all()
            if raw["orderNumber"].startswith(prefix)
        ]
        return f"{prefix}{max(sequence, default=0) + 1:04d}"

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._collection.find(order_id)
        return None if raw is None else self._to_domain(raw)

    def save(self, order: Order) -> None:
        self._collection.upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return compact({
            "id": order.id,
            "orderNumber": order.order_number,
            "userId": order.customer_id,
            "userName": order.customer_name,
            "userEmail": order.customer_email,
            "status": order.status.value,
            "paymentStatus": order.payment_status.value,
            "paymentReference": order.payment_reference,
            "cancellationReason": order.cancellation_reason,
            "subtotal": money_to_raw(order.subtotal),
            "createdAt": dt_to_raw(order.created_at),
            "updatedAt": dt_to_raw(order.updated_at),
            "items": [
                compact({
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "productSlug": item.product_slug,
                    "productSku": item.product_sku,
                    "productImage": item.product_image,
                    "vendorId": item.vendor_id,
                    "vendorName": item.vendor_name,
                    "price": money_to_raw(item.price),
                    "currency": item.price.currency,
                    "quantity": item.quantity,
                    "unit": item.unit,
                    "subtotal": money_to_raw(item.subtotal),
                })
                for item in order.items
            ],
        })

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["productId"],
                product_name=i["productName"],
                product_slug=i.get("productSlug", ""),
                product_sku=i.get("productSku"),
                product_image=i.get("productImage", ""),
                vendor_id=i.get("vendorId", ""),
                vendor_name=i.get("vendorName", ""),
                price=money_from_raw(i["price"], i.get("currency", "USD")),
                quantity=i["quantity"],
                unit=i.get("unit"),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["orderNumber"],
            customer_id=raw["userId"],
            customer_name=raw["userName"],
            customer_email=raw.get("userEmail", ""),
            items=items,
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["paymentStatus"]),
            payment_reference=raw.get("paymentReference"),
            cancellation_reason=raw.get("cancellationReason"),
            created_at=dt_from_raw(raw["createdAt"]),
            updated_at=dt_from_raw(raw["updatedAt"]),
        )
