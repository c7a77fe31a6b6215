"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from ordercore.application.add_product import AddProductHandler
from ordercore.application.dto import ProductDTO
from ordercore.application.restock_product import RestockProductHandler
from ordercore.application.seed_catalog import seed_catalog
from ordercore.application.show_catalog import ShowCatalogHandler
from ordercore.config import Settings
from ordercore.domain.exceptions import DomainException
from ordercore.domain.model.product import ProductCategory
from ordercore.infrastructure.bootstrap import product_catalog

_CATEGORY_CHOICE = click.Choice([c.value for c in ProductCategory], case_sensitive=False)


def _parse_attributes(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse ('brand=Acme', 'model=X1') into a dict."""
    attributes: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid attribute '{pair}'. Expected 'name=value'.",
                param_hint="--attr",
            )
        key, value = pair.split("=", 1)
        attributes[key.strip()] = value.strip()
    return attributes


def _print_table(products: list[ProductDTO]) -> None:
    click.echo(f"{'ID':<10} {'Name':<24} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 66)
    for p in products:
        click.echo(
            f"{p.id:<10} {p.name:<24} {p.category.value:<12} "
            f"{str(p.price):>10} {p.stock_quantity:>6}"
        )


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", required=True, type=_CATEGORY_CHOICE, help="Product category.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--attr", "attrs", multiple=True, help="Category attribute as 'name=value'.")
@click.pass_obj
def catalog_add(
    settings: Settings,
    product_id: str,
    name: str,
    price: str,
    stock: int,
    category: str,
    description: str,
    attrs: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_catalog(settings), settings.currency)

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            price=price,
            stock_quantity=stock,
            category=category,
            description=description,
            attributes=_parse_attributes(attrs),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--category", default=None, type=_CATEGORY_CHOICE, help="Only this category.")
@click.option("--details", "show_details", is_flag=True, help="Print full product details.")
@click.pass_obj
def catalog_list(settings: Settings, category: str | None, show_details: bool) -> None:
    """List products in the catalog."""
    handler = ShowCatalogHandler(product_catalog(settings))
    wanted = None
    if category is not None:
        wanted = next(c for c in ProductCategory if c.value.lower() == category.lower())
    products = handler.handle(wanted)

    if not products:
        click.echo("No products found.")
        return

    if show_details:
        for p in products:
            click.echo(p.details)
            click.echo("-" * 50)
        return

    _print_table(products)


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def catalog_restock(settings: Settings, product_id: str, quantity: int) -> None:
    """Add stock to a product."""
    handler = RestockProductHandler(product_catalog(settings))

    try:
        stock = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} now has {stock} units in stock")


@click.command("low-stock")
@click.option("--threshold", default=5, show_default=True, type=int, help="Maximum units left.")
@click.pass_obj
def catalog_low_stock(settings: Settings, threshold: int) -> None:
    """List products that are running out."""
    handler = ShowCatalogHandler(product_catalog(settings))

    try:
        products = handler.low_stock(threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo(f"No products at or below {threshold} units.")
        return

    _print_table(products)


@click.command("seed")
@click.pass_obj
def catalog_seed(settings: Settings) -> None:
    """Load the demo products."""
    added = seed_catalog(product_catalog(settings), settings.currency)
    if added:
        click.echo(f"Seeded {len(added)} products: {', '.join(added)}")
    else:
        click.echo("Catalog already seeded.")
