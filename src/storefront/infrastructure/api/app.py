"""FastAPI application factory.

Run with::

    storefront serve
    # or
    uvicorn --factory storefront.infrastructure.api.app:create_app --port 3005
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from sqlalchemy.orm import Session, sessionmaker

from storefront.infrastructure.api.exception_handlers import register_exception_handlers
from storefront.infrastructure.api.routes import (
    admin_router,
    cart_router,
    coupon_router,
    order_router,
)
from storefront.infrastructure.bootstrap import session_factory as build_session_factory
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.settings import Settings, get_settings

logger = structlog.get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """Build the application.

    Tests pass their own ``session_factory``; otherwise one is built from
    ``settings.DATABASE_URL``.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Storefront",
        description="Cart, checkout and order lifecycle API",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or build_session_factory(settings)

    register_exception_handlers(app)

    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(coupon_router)
    app.include_router(admin_router)

    @app.get("/health", tags=["Health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Application created", database=_redact(settings.DATABASE_URL))
    return app


def _redact(url: str) -> str:
    """Drop credentials from a database URL before logging it."""
    scheme, sep, rest = url.partition("://")
    if "@" in rest:
        rest = "***@" + rest.split("@", 1)[1]
    return f"{scheme}{sep}{rest}"
