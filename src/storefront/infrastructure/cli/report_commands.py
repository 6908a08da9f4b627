"""CLI commands for admin reports."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import identity_provider, reporting_engine, session_factory
from storefront.infrastructure.settings import Settings


@click.command("sales")
@click.option("--start", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="First day (inclusive).")
@click.option("--end", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Last day (inclusive).")
@click.option("--admin", "admin_id", required=True, type=int, help="Acting admin's customer ID.")
@click.pass_obj
def report_sales(settings: Settings, start, end, admin_id: int) -> None:
    """Units sold and revenue per product."""
    factory = session_factory(settings)

    try:
        identity_provider(factory).resolve(admin_id).require_admin()
        rows = reporting_engine(factory).sales_report(start.date(), end.date())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No sales in this period.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Sold':>6} {'Revenue':>12}")
    click.echo("-" * 47)
    for row in rows:
        click.echo(f"{row.product_id:<6} {row.name:<20} {row.total_quantity_sold:>6} {row.revenue:>12}")


@click.command("low-stock")
@click.option("--threshold", default=None, type=int, help="Alert at or below this stock (default: STOREFRONT_LOW_STOCK_THRESHOLD).")
@click.option("--admin", "admin_id", required=True, type=int, help="Acting admin's customer ID.")
@click.pass_obj
def report_low_stock(settings: Settings, threshold: int | None, admin_id: int) -> None:
    """Products whose stock is at or below the threshold."""
    factory = session_factory(settings)
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    try:
        identity_provider(factory).resolve(admin_id).require_admin()
        alerts = reporting_engine(factory).low_stock_alerts(threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not alerts:
        click.echo("No products at or below the threshold.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Stock':>6}")
    click.echo("-" * 34)
    for alert in alerts:
        click.echo(f"{alert.id:<6} {alert.name:<20} {alert.stock_quantity:>6}")
