"""CLI commands for coupons."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import coupon_admin, identity_provider, session_factory
from storefront.infrastructure.settings import Settings


@click.command("create")
@click.option("--code", required=True, help="Coupon code.")
@click.option("--percent", required=True, help="Discount percent, 0-100 (e.g. 10 or 12.5).")
@click.option("--from", "valid_from", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="First valid day.")
@click.option("--to", "valid_to", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="Last valid day.")
@click.option("--admin", "admin_id", required=True, type=int, help="Acting admin's customer ID.")
@click.pass_obj
def coupon_create(settings: Settings, code: str, percent: str, valid_from, valid_to, admin_id: int) -> None:
    """Create a coupon valid on every day from --from to --to inclusive."""
    factory = session_factory(settings)

    try:
        auth = identity_provider(factory).resolve(admin_id)
        dto = coupon_admin(factory).create_coupon(
            auth,
            code=code,
            discount_percent=percent,
            valid_from=valid_from.date(),
            valid_to=valid_to.date(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Coupon '{dto.code}' created: {dto.discount_percent}% off, "
        f"valid {dto.valid_from} to {dto.valid_to}"
    )
