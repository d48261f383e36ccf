"""CLI commands for order picking (back office)."""

from __future__ import annotations

import functools

import click

from localmarket.application.add_fulfillment_notes import AddFulfillmentNotesHandler
from localmarket.application.cancel_fulfillment import CancelFulfillmentHandler
from localmarket.application.complete_fulfillment import CompleteFulfillmentHandler
from localmarket.application.dto import FulfillmentDTO
from localmarket.application.show_fulfillment import (
    ListFulfillmentsHandler,
    ShowFulfillmentHandler,
)
from localmarket.application.start_fulfillment import StartFulfillmentHandler
from localmarket.application.update_fulfillment_item import UpdateFulfillmentItemHandler
from localmarket.domain.exceptions import DomainException
from localmarket.domain.model.actor import Actor, UserRole
from localmarket.domain.model.fulfillment import FulfillmentStatus, ItemFulfillmentStatus
from localmarket.infrastructure.bootstrap import fulfillment_repository


def actor_options(func):
    """Add --actor-id/--actor-name/--role and pass an ``actor`` argument."""

    @click.option("--actor-id", required=True, envvar="LOCALMARKET_ACTOR_ID", help="Staff user ID.")
    @click.option("--actor-name", default="", envvar="LOCALMARKET_ACTOR_NAME", help="Staff display name.")
    @click.option(
        "--role",
        type=click.Choice([r.value for r in UserRole]),
        default=UserRole.EMPLOYEE.value,
        show_default=True,
        envvar="LOCALMARKET_ACTOR_ROLE",
        help="Role of the acting user.",
    )
    @functools.wraps(func)
    def wrapper(*args, actor_id: str, actor_name: str, role: str, **kwargs):
        try:
            actor = Actor(id=actor_id, name=actor_name or actor_id, role=UserRole(role))
        except DomainException as exc:
            raise click.BadParameter(str(exc))
        return func(*args, actor=actor, **kwargs)

    return wrapper


def _display_fulfillment(dto: FulfillmentDTO) -> None:
    click.echo(f"Fulfillment {dto.id}  (order {dto.order_number}, status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Progress: {dto.total_items_fulfilled}/{dto.total_items_ordered} ({dto.progress}%)")
    if dto.started_by_name:
        click.echo(f"Picker:   {dto.started_by_name}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product ID':<12} {'Product':<24} {'Ordered':>8} {'Picked':>7}  Status")
    click.echo(f"  {'-'*66}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<12} {item.product_name:<24} {item.quantity_ordered:>8} "
            f"{item.quantity_fulfilled:>7}  {item.status}"
            + (f"  ({item.notes})" if item.notes else "")
        )


@click.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in FulfillmentStatus]),
    default=None,
    help="Only show fulfillments in this status.",
)
@actor_options
def fulfillment_list(status: str | None, actor: Actor) -> None:
    """List fulfillments, newest first."""
    handler = ListFulfillmentsHandler(fulfillment_repository())
    try:
        dtos = handler.handle(actor, FulfillmentStatus(status) if status else None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No fulfillments found.")
        return

    click.echo(f"{'ID':<34} {'Order':<15} {'Status':<12} {'Progress':>8}  Customer")
    click.echo("-" * 90)
    for dto in dtos:
        click.echo(
            f"{dto.id:<34} {dto.order_number:<15} {dto.status:<12} "
            f"{dto.progress:>7}%  {dto.customer_name}"
        )


@click.command("show")
@click.option("--id", "fulfillment_id", default=None, help="Fulfillment ID.")
@click.option("--order", "order_id", default=None, help="Look up by order ID instead.")
@actor_options
def fulfillment_show(fulfillment_id: str | None, order_id: str | None, actor: Actor) -> None:
    """Show a fulfillment checklist."""
    if not fulfillment_id and not order_id:
        raise click.UsageError("Pass --id or --order")

    handler = ShowFulfillmentHandler(fulfillment_repository())
    try:
        if fulfillment_id:
            dto = handler.handle(fulfillment_id, actor)
        else:
            dto = handler.by_order(order_id, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_fulfillment(dto)


@click.command("start")
@click.option("--id", "fulfillment_id", required=True, help="Fulfillment ID.")
@actor_options
def fulfillment_start(fulfillment_id: str, actor: Actor) -> None:
    """Start picking an order."""
    try:
        dto = StartFulfillmentHandler(fulfillment_repository()).handle(fulfillment_id, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_fulfillment(dto)


@click.command("item")
@click.option("--id", "fulfillment_id", required=True, help="Fulfillment ID.")
@click.option("--product", "product_id", required=True, help="Product ID of the line.")
@click.option("--quantity", required=True, type=int, help="Units picked.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in ItemFulfillmentStatus if s is not ItemFulfillmentStatus.PENDING]),
    help="Outcome for this line.",
)
@click.option("--notes", default=None, help="Why a line is short or missing.")
@actor_options
def fulfillment_item(
    fulfillment_id: str,
    product_id: str,
    quantity: int,
    status: str,
    notes: str | None,
    actor: Actor,
) -> None:
    """Record the picking outcome for one line."""
    handler = UpdateFulfillmentItemHandler(fulfillment_repository())
    try:
        dto = handler.handle(
            fulfillment_id,
            product_id,
            quantity,
            ItemFulfillmentStatus(status),
            actor,
            notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_fulfillment(dto)


@click.command("complete")
@click.option("--id", "fulfillment_id", required=True, help="Fulfillment ID.")
@click.option("--notes", default=None, help="Closing notes.")
@actor_options
def fulfillment_complete(fulfillment_id: str, notes: str | None, actor: Actor) -> None:
    """Close a fulfillment with short picks."""
    handler = CompleteFulfillmentHandler(fulfillment_repository())
    try:
        dto = handler.handle(fulfillment_id, actor, notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_fulfillment(dto)


@click.command("cancel")
@click.option("--id", "fulfillment_id", required=True, help="Fulfillment ID.")
@click.option("--reason", default=None, help="Why picking was abandoned.")
@actor_options
def fulfillment_cancel(fulfillment_id: str, reason: str | None, actor: Actor) -> None:
    """Cancel a fulfillment."""
    try:
        CancelFulfillmentHandler(fulfillment_repository()).handle(fulfillment_id, actor, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Fulfillment {fulfillment_id} cancelled.")


@click.command("notes")
@click.option("--id", "fulfillment_id", required=True, help="Fulfillment ID.")
@click.option("--text", required=True, help="Notes to store.")
@actor_options
def fulfillment_notes(fulfillment_id: str, text: str, actor: Actor) -> None:
    """Replace the general notes on a fulfillment."""
    try:
        AddFulfillmentNotesHandler(fulfillment_repository()).handle(fulfillment_id, text, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Notes saved on fulfillment {fulfillment_id}.")
