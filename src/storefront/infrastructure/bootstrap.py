"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from storefront.application.coupon_admin import CouponAdmin
from storefront.application.identity import IdentityProvider
from storefront.application.order_ledger import OrderLedger
from storefront.application.reporting import ReportingEngine
from storefront.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
    init_database,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from storefront.infrastructure.settings import Settings, get_settings


def session_factory(settings: Settings | None = None) -> sessionmaker[Session]:
    engine = create_database_engine(settings or get_settings())
    return create_session_factory(engine)


def create_schema(settings: Settings | None = None) -> None:
    init_database(create_database_engine(settings or get_settings()))


def unit_of_work(factory: sessionmaker[Session] | None = None) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(factory or session_factory())


def order_ledger(factory: sessionmaker[Session] | None = None) -> OrderLedger:
    return OrderLedger(unit_of_work(factory))


def coupon_admin(factory: sessionmaker[Session] | None = None) -> CouponAdmin:
    return CouponAdmin(unit_of_work(factory))


def reporting_engine(factory: sessionmaker[Session] | None = None) -> ReportingEngine:
    return ReportingEngine(unit_of_work(factory))


def identity_provider(factory: sessionmaker[Session] | None = None) -> IdentityProvider:
    return IdentityProvider(unit_of_work(factory))
