"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from localmarket.infrastructure.config import Settings, load_settings
from localmarket.infrastructure.notifier import LoggingNotifier
from localmarket.infrastructure.persistence.json_cart_repository import JsonCartRepository
from localmarket.infrastructure.persistence.json_fulfillment_repository import (
    JsonFulfillmentRepository,
)
from localmarket.infrastructure.persistence.json_order_repository import JsonOrderRepository
from localmarket.infrastructure.persistence.json_outbox_repository import (
    JsonOutboxRepository,
)
from localmarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "savedCarts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def fulfillment_repository() -> JsonFulfillmentRepository:
    return JsonFulfillmentRepository(settings().data_dir / "orderFulfillments.json")


def outbox_repository() -> JsonOutboxRepository:
    return JsonOutboxRepository(settings().data_dir / "outbox.json")


def notifier() -> LoggingNotifier:
    return LoggingNotifier()
