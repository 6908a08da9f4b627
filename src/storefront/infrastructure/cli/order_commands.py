"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import identity_provider, order_ledger, session_factory
from storefront.infrastructure.settings import Settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M:%S %Z}")
    if dto.payment_method:
        click.echo(f"Paid by:  {dto.payment_method}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    if dto.coupon_code:
        label = f"Discount ({dto.coupon_code}, {dto.discount_percent}%)"
        click.echo(f"  {label:<27} {'-' + dto.discount:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--customer", "customer_id", required=True, type=int, help="Owning customer ID.")
@click.pass_obj
def order_show(settings: Settings, order_id: int, customer_id: int) -> None:
    """Show details of an existing order."""
    handler = order_ledger(session_factory(settings))

    try:
        dto = handler.get_order(order_id, customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.pass_obj
def order_list(settings: Settings, customer_id: int) -> None:
    """List a customer's orders, newest first."""
    handler = order_ledger(session_factory(settings))

    try:
        orders = handler.list_orders(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Total':>10}  Created")
    click.echo("-" * 50)
    for dto in orders:
        click.echo(f"{dto.id:<6} {dto.status:<12} {dto.total:>10}  {dto.created_at:%Y-%m-%d %H:%M}")


@click.command("set-status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", "new_status", required=True, help="New status label, e.g. Shipped.")
@click.option("--admin", "admin_id", required=True, type=int, help="Acting admin's customer ID.")
@click.pass_obj
def order_set_status(settings: Settings, order_id: int, new_status: str, admin_id: int) -> None:
    """Overwrite an order's status (admin only)."""
    factory = session_factory(settings)

    try:
        auth = identity_provider(factory).resolve(admin_id)
        dto = order_ledger(factory).admin_set_status(auth, order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} status set to {dto.status}.")
