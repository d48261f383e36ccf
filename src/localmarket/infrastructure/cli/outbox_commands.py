"""CLI commands for the side-effect outbox (run from cron)."""

from __future__ import annotations

import click

from localmarket.application.process_outbox import ProcessOutboxHandler
from localmarket.domain.exceptions import DomainException
from localmarket.infrastructure.bootstrap import (
    fulfillment_repository,
    notifier,
    order_repository,
    outbox_repository,
    settings,
)


@click.command("process")
def outbox_process() -> None:
    """Run every pending outbox task once."""
    handler = ProcessOutboxHandler(
        outbox_repo=outbox_repository(),
        order_repo=order_repository(),
        fulfillment_repo=fulfillment_repository(),
        notifier=notifier(),
    )
    try:
        report = handler.handle(max_attempts=settings().outbox_max_attempts)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Processed {report.processed} task(s): "
        f"{report.succeeded} succeeded, {report.failed} failed."
    )
