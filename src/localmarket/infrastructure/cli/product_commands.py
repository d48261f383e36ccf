"""CLI commands for the Product catalogue."""

from __future__ import annotations

import click

from localmarket.application.add_product import AddProductHandler
from localmarket.domain.exceptions import DomainException
from localmarket.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 4.99).")
@click.option("--sale-price", default=None, help="Optional sale price.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--unit", default=None, help="Unit label, e.g. 'lb'.")
@click.option("--vendor-id", required=True, help="Vendor ID.")
@click.option("--vendor-name", required=True, help="Vendor display name.")
def product_add(
    name: str,
    price: str,
    sale_price: str | None,
    stock: int,
    unit: str | None,
    vendor_id: str,
    vendor_name: str,
) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            price=price,
            sale_price=sale_price,
            stock=stock,
            unit=unit,
            vendor_id=vendor_id,
            vendor_name=vendor_name,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.effective_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalogue."""
    try:
        products = product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>7}  Vendor")
    click.echo("-" * 64)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<24} {str(p.effective_price):>10} {p.stock:>7}  {p.vendor_name}"
        )
