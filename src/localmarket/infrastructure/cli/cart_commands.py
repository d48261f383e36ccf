"""CLI commands for shopping carts."""

from __future__ import annotations

import click

from localmarket.application.add_to_cart import AddToCartHandler
from localmarket.application.cart_maintenance import CartMaintenanceHandler
from localmarket.application.clear_cart import ClearCartHandler
from localmarket.application.dto import CartDTO
from localmarket.application.merge_guest_cart import MergeGuestCartHandler
from localmarket.application.remove_from_cart import RemoveFromCartHandler
from localmarket.application.show_cart import ShowCartHandler
from localmarket.application.update_cart_item import UpdateCartItemHandler
from localmarket.domain.exceptions import DomainException
from localmarket.infrastructure.bootstrap import cart_repository, product_repository, settings

_owner_option = click.option("--owner", required=True, help="User ID or guest session key.")


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo(f"Cart for {dto.owner_id} is empty.")
        return

    click.echo(f"Cart for {dto.owner_id}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*52}")
    for item in dto.items:
        price = item.unit_price + ("*" if item.on_sale else "")
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*52}")
    click.echo(f"  {'Subtotal':<24} {dto.item_count:>5} {dto.subtotal:>21}")


@click.command("show")
@_owner_option
def cart_show(owner: str) -> None:
    """Show the contents of a cart."""
    try:
        dto = ShowCartHandler(cart_repository()).handle(owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("add")
@_owner_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(owner: str, product_id: str, quantity: int) -> None:
    """Add a product to a cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        cart_ttl=settings().cart_ttl,
    )
    try:
        dto = handler.handle(owner, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("update")
@_owner_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(owner: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        cart_ttl=settings().cart_ttl,
    )
    try:
        dto = handler.handle(owner, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("remove")
@_owner_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(owner: str, product_id: str) -> None:
    """Remove a product from a cart."""
    handler = RemoveFromCartHandler(cart_repo=cart_repository(), cart_ttl=settings().cart_ttl)
    try:
        dto = handler.handle(owner, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("clear")
@_owner_option
def cart_clear(owner: str) -> None:
    """Empty a cart."""
    try:
        ClearCartHandler(cart_repository()).handle(owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Cart for {owner} cleared.")


@click.command("stats")
def cart_stats() -> None:
    """Show saved-cart statistics."""
    try:
        stats = CartMaintenanceHandler(cart_repository()).stats()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Saved carts:   {stats.total_carts}")
    click.echo(f"Items:         {stats.total_items}")
    click.echo(f"Total value:   {stats.total_value}")
    click.echo(f"Average value: {stats.average_value}")


@click.command("purge")
@click.option("--days", default=90, show_default=True, type=int, help="Days of inactivity.")
def cart_purge(days: int) -> None:
    """Delete carts that have not changed for --days days."""
    try:
        deleted = CartMaintenanceHandler(cart_repository()).clear_expired(days)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Deleted {deleted} expired cart(s).")


@click.command("abandoned")
@click.option("--days", default=7, show_default=True, type=int, help="Days of inactivity.")
def cart_abandoned(days: int) -> None:
    """List carts that have not changed for --days days."""
    try:
        carts = CartMaintenanceHandler(cart_repository()).abandoned_carts(days)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not carts:
        click.echo("No abandoned carts.")
        return
    for dto in carts:
        click.echo(f"{dto.owner_id:<32} {dto.item_count:>5} items {dto.subtotal:>12}")


@click.command("merge")
@click.option("--guest", "guest_id", required=True, help="Guest session key.")
@click.option("--user", "user_id", required=True, help="Signed-in user ID.")
def cart_merge(guest_id: str, user_id: str) -> None:
    """Fold a guest cart into a user's saved cart."""
    handler = MergeGuestCartHandler(cart_repo=cart_repository(), cart_ttl=settings().cart_ttl)
    try:
        dto = handler.handle(guest_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)
