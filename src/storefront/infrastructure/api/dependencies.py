"""FastAPI dependencies: storage, identity and application services.

The session factory lives on ``app.state``; every request gets its own
unit of work and its identity context, resolved once.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session, sessionmaker

from storefront.application.cart_ledger import CartLedger
from storefront.application.coupon_admin import CouponAdmin
from storefront.application.identity import IdentityProvider
from storefront.application.order_ledger import OrderLedger
from storefront.application.reporting import ReportingEngine
from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.auth import AuthContext
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from storefront.infrastructure.settings import Settings


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_session_factory(request: Request) -> sessionmaker[Session]:
    return request.app.state.session_factory


def get_uow(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> UnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)


def get_auth_context(
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    x_customer_id: Annotated[str | None, Header()] = None,
) -> AuthContext:
    """Identity of the caller.

    The upstream authentication gateway verifies the bearer token and
    forwards the customer ID in ``X-Customer-Id``.  A value that is not
    an integer identifies nobody.
    """
    customer_id = None
    if x_customer_id is not None:
        try:
            customer_id = int(x_customer_id)
        except ValueError as exc:
            raise AuthenticationError("Invalid customer identity") from exc
    return IdentityProvider(uow).resolve(customer_id)


def get_admin_context(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> AuthContext:
    auth.require_admin()
    return auth


def get_cart_ledger(uow: Annotated[UnitOfWork, Depends(get_uow)]) -> CartLedger:
    return CartLedger(uow)


def get_order_ledger(uow: Annotated[UnitOfWork, Depends(get_uow)]) -> OrderLedger:
    return OrderLedger(uow)


def get_coupon_admin(uow: Annotated[UnitOfWork, Depends(get_uow)]) -> CouponAdmin:
    return CouponAdmin(uow)


def get_reporting_engine(uow: Annotated[UnitOfWork, Depends(get_uow)]) -> ReportingEngine:
    return ReportingEngine(uow)


Auth = Annotated[AuthContext, Depends(get_auth_context)]
AdminAuth = Annotated[AuthContext, Depends(get_admin_context)]
Carts = Annotated[CartLedger, Depends(get_cart_ledger)]
Orders = Annotated[OrderLedger, Depends(get_order_ledger)]
Coupons = Annotated[CouponAdmin, Depends(get_coupon_admin)]
Reports = Annotated[ReportingEngine, Depends(get_reporting_engine)]
AppSettings = Annotated[Settings, Depends(get_settings_dep)]
