"""Order entity — the snapshot a checkout produces.

Orders are owned by the order-management side of the storefront; the
fulfillment record only ever reads a copy of the line items taken at the
moment the fulfillment is created.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.cart import Cart
from localmarket.domain.model.pricing import cart_totals
from localmarket.domain.model.value_objects import Money


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


@dataclass
class OrderLineItem:
    """Price snapshot of one cart line at checkout time."""

    product_id: str
    product_name: str
    product_slug: str
    vendor_id: str
    vendor_name: str
    price: Money  # locked at checkout
    quantity: int
    product_sku: str | None = None
    product_image: str = ""
    unit: str | None = None

    @property
    def subtotal(self) -> Money:
        return (self.price * self.quantity).rounded()


@dataclass
class Order:
    """A placed order.

    Use ``Order.from_cart()`` for new orders. The ``__init__`` is kept
    plain so the repository can reconstitute persisted orders without
    re-validating them.
    """

    id: str
    order_number: str
    customer_id: str
    customer_name: str
    customer_email: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_cart(
        order_id: str,
        order_number: str,
        cart: Cart,
        customer_name: str,
        customer_email: str,
    ) -> Order:
        if cart.is_empty:
            raise ValidationError("Cannot place an order from an empty cart")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")

        items = [
            OrderLineItem(
                product_id=line.product_id,
                product_name=line.product_name,
                product_slug=line.product_slug,
                vendor_id=line.vendor_id,
                vendor_name=line.vendor_name,
                price=line.unit_price,
                quantity=line.quantity,
                product_sku=line.product_sku,
                product_image=line.image,
                unit=line.unit,
            )
            for line in cart.items
        ]
        return Order(
            id=order_id,
            order_number=order_number,
            customer_id=cart.owner_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email,
            items=items,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, payment_reference: str, now: datetime) -> None:
        """Record a confirmed payment (PENDING -> PAID)."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot mark order {self.order_number} paid — "
                f"current status is {self.status.value}"
            )
        self.status = OrderStatus.PAID
        self.payment_status = PaymentStatus.PAID
        self.payment_reference = payment_reference
        self.updated_at = now

    def cancel(self, now: datetime, reason: str | None = None) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError(f"Order {self.order_number} is already cancelled")
        if self.status == OrderStatus.COMPLETED:
            raise ValidationError(f"Cannot cancel completed order {self.order_number}")
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        return cart_totals(self.items)[0]

    @property
    def item_count(self) -> int:
        return cart_totals(self.items)[1]

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID
