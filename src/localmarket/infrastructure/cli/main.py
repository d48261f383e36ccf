import click

from localmarket.infrastructure.bootstrap import settings
from localmarket.infrastructure.cli.cart_commands import (
    cart_abandoned,
    cart_add,
    cart_clear,
    cart_merge,
    cart_purge,
    cart_remove,
    cart_show,
    cart_stats,
    cart_update,
)
from localmarket.infrastructure.cli.fulfillment_commands import (
    fulfillment_cancel,
    fulfillment_complete,
    fulfillment_item,
    fulfillment_list,
    fulfillment_notes,
    fulfillment_show,
    fulfillment_start,
)
from localmarket.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_pay,
    order_show,
)
from localmarket.infrastructure.cli.outbox_commands import outbox_process
from localmarket.infrastructure.cli.product_commands import product_add, product_list
from localmarket.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Local Market — storefront back office"""
    config = settings()
    configure_logging(config.log_level, json=config.log_json)


@cli.group()
def product() -> None:
    """Manage the catalogue."""


@cli.group()
def cart() -> None:
    """Inspect and edit shopping carts."""


@cli.group()
def order() -> None:
    """Check out, pay and cancel orders."""


@cli.group()
def fulfillment() -> None:
    """Pick orders."""


@cli.group()
def outbox() -> None:
    """Run queued side effects."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
cart.add_command(cart_abandoned)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_merge)
cart.add_command(cart_purge)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_stats)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_pay)
order.add_command(order_show)
fulfillment.add_command(fulfillment_cancel)
fulfillment.add_command(fulfillment_complete)
fulfillment.add_command(fulfillment_item)
fulfillment.add_command(fulfillment_list)
fulfillment.add_command(fulfillment_notes)
fulfillment.add_command(fulfillment_show)
fulfillment.add_command(fulfillment_start)
outbox.add_command(outbox_process)
