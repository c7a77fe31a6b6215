import click

from ordercore.config import Settings, get_settings
from ordercore.infrastructure.cli.catalog_commands import (
    catalog_add,
    catalog_list,
    catalog_low_stock,
    catalog_restock,
    catalog_seed,
)
from ordercore.infrastructure.cli.order_commands import (
    order_add_item,
    order_create,
    order_list,
    order_pay,
    order_show,
    order_status,
)
from ordercore.logging import add_context, clear_context, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Orders, stock and payments."""
    if ctx.obj is None:
        ctx.obj = get_settings()
    configure_logging(ctx.obj)
    clear_context()
    add_context(command=ctx.invoked_subcommand)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def catalog() -> None:
    """Manage the product catalog."""


@cli.group()
def config() -> None:
    """Inspect configuration."""


@config.command("show")
@click.pass_obj
def config_show(settings: Settings) -> None:
    """Print the effective settings."""
    for key, value in settings.model_dump().items():
        click.echo(f"{key:<24} {value}")


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
order.add_command(order_status)
catalog.add_command(catalog_add)
catalog.add_command(catalog_list)
catalog.add_command(catalog_low_stock)
catalog.add_command(catalog_restock)
catalog.add_command(catalog_seed)
