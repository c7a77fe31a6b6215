"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from ordercore.application.dto import OrderDTO
from ordercore.config import Settings
from ordercore.domain.exceptions import DomainException
from ordercore.domain.model.order import OrderStatus
from ordercore.domain.payment.registry import PAYMENT_METHODS, payment_method_for
from ordercore.infrastructure.bootstrap import order_coordinator, payment_gateway


def _parse_details(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse ('cardNumber=4111...', 'cvv=123') into a dict."""
    details: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid detail '{pair}'. Expected 'field=value'.",
                param_hint="--detail",
            )
        key, value = pair.split("=", 1)
        details[key.strip()] = value.strip()
    return details


def _keep(orders: list[OrderDTO], allowed: list[OrderDTO]) -> list[OrderDTO]:
    ids = {o.id for o in allowed}
    return [o for o in orders if o.id in ids]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status.value})")
    click.echo(f"Customer: {dto.customer_name} ({dto.customer_id})")
    click.echo(f"Created:  {dto.created_at_display}")
    if dto.payment_method:
        click.echo(f"Paid via: {dto.payment_method}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*53}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} "
            f"{str(item.unit_price):>10} {str(item.line_total):>12}"
        )
    click.echo(f"  {'-'*53}")
    click.echo(f"  {'Order Total':<30} {str(dto.total):>22}")


@click.command("create")
@click.option("--customer-id", required=True, help="Customer identifier.")
@click.option("--customer-name", required=True, help="Customer display name.")
@click.pass_obj
def order_create(settings: Settings, customer_id: str, customer_name: str) -> None:
    """Create a new, empty order."""
    coordinator = order_coordinator(settings)
    try:
        dto = coordinator.create_order(customer_id, customer_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status.value})")


@click.command("add-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def order_add_item(settings: Settings, order_id: str, product_id: str, quantity: int) -> None:
    """Add a product to an order (reserves stock)."""
    coordinator = order_coordinator(settings)
    try:
        coordinator.add_item(order_id, product_id, quantity)
        dto = coordinator.get_order(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} x {product_id} to order {order_id}  (total={dto.total})")


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--method",
    required=True,
    type=click.Choice(sorted(PAYMENT_METHODS), case_sensitive=False),
    help="Payment method.",
)
@click.option("--detail", "details", multiple=True, help="Payment field as 'name=value'.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the charge.")
@click.pass_obj
def order_pay(
    settings: Settings,
    order_id: str,
    method: str,
    details: tuple[str, ...],
    timeout: float | None,
) -> None:
    """Pay for a pending order."""
    payment_details = _parse_details(details)

    coordinator = order_coordinator(settings)
    try:
        strategy = payment_method_for(method, payment_gateway(settings))
        outcome = coordinator.commit_payment(
            order_id, strategy, payment_details, timeout=timeout
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not outcome.success:
        raise click.ClickException(
            f"Payment of {outcome.amount} via {outcome.method} failed ({outcome.reason}); "
            f"order {order_id} is still PENDING."
        )
    click.echo(f"Payment of {outcome.amount} via {outcome.method} accepted; order {order_id} is PROCESSING.")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--to",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Target status.",
)
@click.pass_obj
def order_status(settings: Settings, order_id: str, new_status: str) -> None:
    """Move an order to a new status."""
    coordinator = order_coordinator(settings)
    try:
        coordinator.update_status(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {new_status.upper()}.")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    coordinator = order_coordinator(settings)
    try:
        dto = coordinator.get_order(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", "customer_id", default=None, help="Only this customer's orders.")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Only orders in this status.",
)
@click.option("--since", type=click.DateTime(), default=None, help="Created on or after.")
@click.option("--until", type=click.DateTime(), default=None, help="Created on or before.")
@click.pass_obj
def order_list(
    settings: Settings,
    customer_id: str | None,
    status: str | None,
    since: datetime | None,
    until: datetime | None,
) -> None:
    """List orders, optionally filtered."""
    coordinator = order_coordinator(settings)
    try:
        if customer_id is not None:
            orders = coordinator.list_orders_by_customer(customer_id)
        else:
            orders = coordinator.list_orders()
        # Each further filter keeps only the orders its query also returns
        if since is not None or until is not None:
            in_range = coordinator.list_orders_by_date_range(
                since or datetime.min, until or datetime.max
            )
            orders = _keep(orders, in_range)
        if status is not None:
            orders = _keep(orders, coordinator.list_orders_by_status(status))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Customer':<20} {'Status':<11} {'Items':>5} {'Total':>12}")
    click.echo("-" * 86)
    for o in orders:
        click.echo(
            f"{o.id:<34} {o.customer_name:<20} {o.status.value:<11} "
            f"{len(o.items):>5} {str(o.total):>12}"
        )
