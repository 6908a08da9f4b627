import click

from storefront.infrastructure.cli.coupon_commands import coupon_create
from storefront.infrastructure.cli.db_commands import db_init, serve
from storefront.infrastructure.cli.order_commands import order_list, order_set_status, order_show
from storefront.infrastructure.cli.report_commands import report_low_stock, report_sales
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.settings import Settings


@click.group()
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy URL; overrides STOREFRONT_DATABASE_URL.",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """Storefront: carts, checkout and order lifecycle."""
    settings = Settings(DATABASE_URL=database_url) if database_url else Settings()
    configure_logging(settings)
    ctx.obj = settings


@cli.group()
def db() -> None:
    """Manage the database schema."""


@cli.group()
def order() -> None:
    """Inspect and administer orders."""


@cli.group()
def coupon() -> None:
    """Manage coupons."""


@cli.group()
def report() -> None:
    """Admin reports."""


# Register subcommands
cli.add_command(serve)
db.add_command(db_init)
order.add_command(order_list)
order.add_command(order_set_status)
order.add_command(order_show)
coupon.add_command(coupon_create)
report.add_command(report_low_stock)
report.add_command(report_sales)
