"""CLI commands for checkout and orders."""

from __future__ import annotations

import click

from localmarket.application.cancel_order import CancelOrderHandler
from localmarket.application.confirm_payment import ConfirmPaymentHandler
from localmarket.application.dto import OrderDTO
from localmarket.application.place_order import PlaceOrderHandler
from localmarket.application.show_order import ShowOrderHandler
from localmarket.domain.exceptions import DomainException
from localmarket.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    outbox_repository,
    product_repository,
)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*52}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*52}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>21}")


@click.command("checkout")
@click.option("--customer-id", required=True, help="Customer user ID (cart owner).")
@click.option("--name", "customer_name", required=True, help="Customer name.")
@click.option("--email", "customer_email", required=True, help="Customer email.")
def order_checkout(customer_id: str, customer_name: str, customer_email: str) -> None:
    """Place an order for everything in the customer's cart."""
    handler = PlaceOrderHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
    )
    try:
        dto = handler.handle(customer_id, customer_name, customer_email)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_order(dto)


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--reference", required=True, help="Payment provider reference.")
def order_pay(order_id: str, reference: str) -> None:
    """Record a confirmed payment for an order."""
    handler = ConfirmPaymentHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        cart_repo=cart_repository(),
        outbox_repo=outbox_repository(),
    )
    try:
        recorded = handler.handle(order_id, reference)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if recorded:
        click.echo(f"Payment recorded for order {order_id}; fulfillment queued.")
    else:
        click.echo(f"Payment for order {order_id} was already recorded.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_id: str, reason: str | None) -> None:
    """Cancel an order (its fulfillment is cancelled via the outbox)."""
    handler = CancelOrderHandler(order_repo=order_repository(), outbox_repo=outbox_repository())
    try:
        handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Order {order_id} cancelled.")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(order_repo=order_repository()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_order(dto)
