"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money is pre-formatted
for display, e.g. ``"$15.00"``.
"""

from __future__ import annotations

from dataclasses import dataclass

from localmarket.domain.model.cart import Cart
from localmarket.domain.model.fulfillment import OrderFulfillment
from localmarket.domain.model.order import Order


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    vendor_name: str
    quantity: int
    unit: str | None
    unit_price: str
    on_sale: bool
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    owner_id: str
    items: list[CartLineDTO]
    subtotal: str
    item_count: int
    unique_item_count: int

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            owner_id=cart.owner_id,
            items=[
                CartLineDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    vendor_name=item.vendor_name,
                    quantity=item.quantity,
                    unit=item.unit,
                    unit_price=str(item.unit_price),
                    on_sale=item.sale_price is not None,
                    subtotal=str(item.subtotal),
                )
                for item in cart.items
            ],
            subtotal=str(cart.subtotal),
            item_count=cart.item_count,
            unique_item_count=cart.unique_item_count,
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_name: str
    quantity: int
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    order_number: str
    customer_name: str
    status: str
    payment_status: str
    items: list[OrderLineItemDTO]
    subtotal: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer_name,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[
                OrderLineItemDTO(
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=str(item.price),
                    subtotal=str(item.subtotal),
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class FulfillmentItemDTO:
    product_id: str
    product_name: str
    quantity_ordered: int
    quantity_fulfilled: int
    status: str
    notes: str | None
    processed_by_name: str | None


@dataclass(frozen=True)
class FulfillmentDTO:
    id: str
    order_id: str
    order_number: str
    customer_name: str
    status: str
    items: list[FulfillmentItemDTO]
    total_items_ordered: int
    total_items_fulfilled: int
    progress: int
    started_by_name: str | None
    completed_by_name: str | None
    notes: str | None
    created_at: str

    @staticmethod
    def from_fulfillment(fulfillment: OrderFulfillment) -> FulfillmentDTO:
        return FulfillmentDTO(
            id=fulfillment.id,
            order_id=fulfillment.order_id,
            order_number=fulfillment.order_number,
            customer_name=fulfillment.customer_name,
            status=fulfillment.status.value,
            items=[
                FulfillmentItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity_ordered=item.quantity_ordered,
                    quantity_fulfilled=item.quantity_fulfilled,
                    status=item.status.value,
                    notes=item.notes,
                    processed_by_name=item.processed_by_name,
                )
                for item in fulfillment.items
            ],
            total_items_ordered=fulfillment.total_items_ordered,
            total_items_fulfilled=fulfillment.total_items_fulfilled,
            progress=fulfillment.progress,
            started_by_name=fulfillment.started_by_name,
            completed_by_name=fulfillment.completed_by_name,
            notes=fulfillment.notes,
            created_at=fulfillment.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
