"""JSON-file-backed implementation of FulfillmentRepository.

Documents follow the ``orderFulfillments`` shape used by the storefront.
The derived totals are written for readers of the raw collection but
always recomputed from the items when a document is loaded.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from localmarket.domain.exceptions import ConcurrencyError
from localmarket.domain.model.fulfillment import (
    FulfillmentItem,
    FulfillmentStatus,
    ItemFulfillmentStatus,
    OrderFulfillment,
)
from localmarket.domain.repository.fulfillment_repository import FulfillmentRepository
from localmarket.infrastructure.persistence.json_collection import (
    JsonCollection,
    compact,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonFulfillmentRepository(FulfillmentRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- FulfillmentRepository interface --------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, fulfillment_id: str) -> OrderFulfillment | None:
        raw = self._collection.find(fulfillment_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_order_id(self, order_id: str) -> OrderFulfillment | None:
        for raw in self._collection.all():
            if raw["orderId"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self, status: FulfillmentStatus | None = None) -> list[OrderFulfillment]:
        fulfillments = [self._to_domain(raw) for raw in self._collection.all()]
        if status is not None:
            fulfillments = [f for f in fulfillments if f.status == status]
        return sorted(fulfillments, key=lambda f: f.created_at, reverse=True)

    def save(self, fulfillment: OrderFulfillment) -> None:
        stored = self._collection.find(fulfillment.id)
        stored_version = stored.get("version", 0) if stored is not None else 0
        if stored_version != fulfillment.version:
            raise ConcurrencyError(
                f"Fulfillment for order {fulfillment.order_number} was changed by "
                f"someone else (version {stored_version}, expected {fulfillment.version})"
            )
        fulfillment.version += 1
        self._collection.upsert(self._to_raw(fulfillment))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(f: OrderFulfillment) -> dict:
        return compact({
            "id": f.id,
            "orderId": f.order_id,
            "orderNumber": f.order_number,
            "customerId": f.customer_id,
            "customerName": f.customer_name,
            "status": f.status.value,
            "items": [
                compact({
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "productImage": item.product_image,
                    "sku": item.sku,
                    "quantityOrdered": item.quantity_ordered,
                    "quantityFulfilled": item.quantity_fulfilled,
                    "unitPrice": money_to_raw(item.unit_price),
                    "currency": item.unit_price.currency,
                    "status": item.status.value,
                    "notes": item.notes,
                    "processedBy": item.processed_by,
                    "processedByName": item.processed_by_name,
                    "processedAt": dt_to_raw(item.processed_at),
                })
                for item in f.items
            ],
            "totalItemsOrdered": f.total_items_ordered,
            "totalItemsFulfilled": f.total_items_fulfilled,
            "startedBy": f.started_by,
            "startedByName": f.started_by_name,
            "startedAt": dt_to_raw(f.started_at),
            "completedBy": f.completed_by,
            "completedByName": f.completed_by_name,
            "completedAt": dt_to_raw(f.completed_at),
            "notes": f.notes,
            "createdAt": dt_to_raw(f.created_at),
            "updatedAt": dt_to_raw(f.updated_at),
            "version": f.version,
        })

    @staticmethod
    def _to_domain(raw: dict) -> OrderFulfillment:
        items = [
            FulfillmentItem(
                product_id=i["productId"],
                product_name=i["productName"],
                product_image=i.get("productImage"),
                sku=i.get("sku"),
                quantity_ordered=i["quantityOrdered"],
                quantity_fulfilled=i.get("quantityFulfilled", 0),
                unit_price=money_from_raw(i["unitPrice"], i.get("currency", "USD")),
                status=ItemFulfillmentStatus.parse(i["status"]),
                notes=i.get("notes"),
                processed_by=i.get("processedBy"),
                processed_by_name=i.get("processedByName"),
                processed_at=dt_from_raw(i.get("processedAt")),
            )
            for i in raw["items"]
        ]
        return OrderFulfillment(
            id=raw["id"],
            order_id=raw["orderId"],
            order_number=raw["orderNumber"],
            customer_id=raw["customerId"],
            customer_name=raw["customerName"],
            status=FulfillmentStatus.parse(raw["status"]),
            items=items,
            started_by=raw.get("startedBy"),
            started_by_name=raw.get("startedByName"),
            started_at=dt_from_raw(raw.get("startedAt")),
            completed_by=raw.get("completedBy"),
            completed_by_name=raw.get("completedByName"),
            completed_at=dt_from_raw(raw.get("completedAt")),
            notes=raw.get("notes"),
            created_at=dt_from_raw(raw["createdAt"]),
            updated_at=dt_from_raw(raw["updatedAt"]),
            version=raw.get("version", 0),
        )
