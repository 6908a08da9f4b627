"""CLI commands for the database and the HTTP server."""

from __future__ import annotations

import click
import uvicorn

from storefront.infrastructure.api.app import create_app
from storefront.infrastructure.bootstrap import create_schema
from storefront.infrastructure.settings import Settings


@click.command("init")
@click.pass_obj
def db_init(settings: Settings) -> None:
    """Create all tables that do not exist yet."""
    create_schema(settings)
    click.echo("Database schema created.")


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default: STOREFRONT_HOST).")
@click.option("--port", default=None, type=int, help="Bind port (default: STOREFRONT_PORT).")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None) -> None:
    """Run the HTTP API with uvicorn."""
    uvicorn.run(
        create_app(settings),
        host=host or settings.HOST,
        port=port or settings.PORT,
        log_config=None,
    )
