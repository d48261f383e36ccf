"""Cart aggregate — a shopper's in-progress selection.

The cart is the sole arithmetic authority for "what will this cost".
Totals are derived from the lines on every read, so there is no stored
subtotal that could drift from the items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from localmarket.domain.exceptions import NotFoundError, ValidationError
from localmarket.domain.model.pricing import cart_totals, effective_price, line_subtotal
from localmarket.domain.model.product import Product
from localmarket.domain.model.value_objects import Money, Quantity


@dataclass
class CartItem:
    """A product line captured from a catalogue snapshot.

    ``quantity`` is kept within ``[1, stock]`` by the callers; the line
    itself only refuses non-positive quantities.
    """

    product_id: str
    product_name: str
    product_slug: str
    price: Money
    quantity: int
    stock: int
    vendor_id: str
    vendor_name: str
    sale_price: Money | None = None
    image: str = ""
    unit: str | None = None
    product_sku: str | None = None

    @property
    def unit_price(self) -> Money:
        return effective_price(self.price, self.sale_price)

    @property
    def subtotal(self) -> Money:
        return line_subtotal(self.price, self.sale_price, self.quantity)

    @staticmethod
    def from_product(product: Product, quantity: int) -> CartItem:
        return CartItem(
            product_id=product.id,
            product_name=product.name,
            product_slug=product.slug,
            price=product.price,
            sale_price=product.sale_price,
            quantity=Quantity(quantity).value,
            stock=product.stock,
            image=product.first_image,
            unit=product.unit,
            product_sku=product.sku,
            vendor_id=product.vendor_id,
            vendor_name=product.vendor_name,
        )


@dataclass
class Cart:
    """Aggregate root for a shopping cart.

    ``owner_id`` is either an authenticated user id or a guest session
    key; a cart is never shared between owners.
    """

    owner_id: str
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime | None = None

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartItem:
        """Add *quantity* of *product*, merging into an existing line."""
        Quantity(quantity)
        existing = self.find_item(product.id)
        if existing is not None:
            existing.quantity += quantity
            return existing

        item = CartItem.from_product(product, quantity)
        self.items.append(item)
        return item

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set the quantity of a line; anything below 1 removes it."""
        item = self.find_item(product_id)
        if item is None:
            raise NotFoundError(f"Product '{product_id}' is not in the cart")
        if quantity < 1:
            self.remove_item(product_id)
            return
        item.quantity = quantity

    def remove_item(self, product_id: str) -> None:
        """Drop the line for *product_id*. Unknown ids are ignored."""
        self.items = [i for i in self.items if i.product_id != product_id]

    def merge(self, other_items: list[CartItem]) -> None:
        """Fold another cart's lines (e.g. a guest cart) into this one."""
        for incoming in other_items:
            existing = self.find_item(incoming.product_id)
            if existing is None:
                self.items.append(incoming)
            else:
                existing.quantity += incoming.quantity

    def clear(self) -> None:
        self.items = []

    def touch(self, now: datetime, ttl: timedelta | None = None) -> None:
        """Record a write; saved carts expire *ttl* after their last change."""
        self.updated_at = now
        self.expires_at = now + ttl if ttl else None

    # --- Computed properties --------------------------------------------------

    def totals(self) -> tuple[Money, int]:
        return cart_totals(self.items)

    @property
    def subtotal(self) -> Money:
        return self.totals()[0]

    @property
    def item_count(self) -> int:
        return self.totals()[1]

    @property
    def unique_item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None
