"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices change, stock is sold down, vendors add and retire
listings. Carts and orders only ever hold a snapshot of a product.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.pricing import effective_price
from localmarket.domain.model.value_objects import Money


@dataclass
class Product:
    """A vendor's product listing in the marketplace catalogue."""

    id: str
    name: str
    slug: str
    price: Money
    vendor_id: str
    vendor_name: str
    stock: int = 0
    sale_price: Money | None = None
    unit: str | None = None
    sku: str | None = None
    images: list[str] = field(default_factory=list)
    is_active: bool = True

    @property
    def effective_price(self) -> Money:
        return effective_price(self.price, self.sale_price)

    @property
    def first_image(self) -> str:
        return self.images[0] if self.images else ""

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def update_price(self, new_price: Money, sale_price: Money | None = None) -> None:
        """Change the list price (and optionally the sale price).

        This does NOT affect existing carts or orders because both
        capture a price snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if sale_price is not None and sale_price.amount >= new_price.amount:
            raise ValidationError("Sale price must be lower than the regular price")
        self.price = new_price
        self.sale_price = sale_price

    def decrement_stock(self, quantity: int) -> None:
        """Deduct sold units after payment; stock never drops below zero."""
        if quantity <= 0:
            raise ValidationError("Stock decrement must be positive")
        self.stock = max(0, self.stock - quantity)
