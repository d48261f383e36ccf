"""Test data builders shared by the domain and application tests."""

from __future__ import annotations

from localmarket.domain.model.actor import Actor, UserRole
from localmarket.domain.model.order import Order, OrderLineItem
from localmarket.domain.model.product import Product
from localmarket.domain.model.value_objects import Money

GROCER = Actor(id="u-grocer", name="Gail Grocer", role=UserRole.EMPLOYEE)
OTHER_GROCER = Actor(id="u-other", name="Omar Other", role=UserRole.EMPLOYEE)
MANAGER = Actor(id="u-manager", name="Mia Manager", role=UserRole.MANAGER)
CUSTOMER = Actor(id="u-customer", name="Cara Customer", role=UserRole.CUSTOMER)


def make_product(
    product_id: str = "p1",
    name: str = "Heirloom Tomatoes",
    price: str = "10.00",
    sale_price: str | None = None,
    stock: int = 20,
    unit: str | None = "lb",
) -> Product:
    return Product(
        id=product_id,
        name=name,
        slug=name.lower().replace(" ", "-"),
        price=Money.of(price),
        sale_price=Money.of(sale_price) if sale_price is not None else None,
        stock=stock,
        unit=unit,
        images=[f"https://cdn.example.com/{product_id}.jpg"],
        vendor_id="v1",
        vendor_name="Sunny Acres Farm",
    )


def make_order(quantities: list[int] | None = None, order_id: str = "order-1") -> Order:
    quantities = quantities if quantities is not None else [2, 1, 4]
    items = [
        OrderLineItem(
            product_id=f"p{i + 1}",
            product_name=f"Product {i + 1}",
            product_slug=f"product-{i + 1}",
            vendor_id="v1",
            vendor_name="Sunny Acres Farm",
            price=Money.of("3.50"),
            quantity=qty,
            product_sku=f"SKU-{i + 1}",
            product_image=f"https://cdn.example.com/p{i + 1}.jpg",
        )
        for i, qty in enumerate(quantities)
    ]
    return Order(
        id=order_id,
        order_number="ORD-2025-0001",
        customer_id="u-customer",
        customer_name="Cara Customer",
        customer_email="cara@example.com",
        items=items,
    )
