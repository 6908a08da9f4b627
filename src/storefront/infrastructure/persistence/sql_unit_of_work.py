"""SQLAlchemy unit of work: one session, one transaction."""

from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.exceptions import StorageError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from storefront.infrastructure.persistence.sql_catalog import SqlCatalog
from storefront.infrastructure.persistence.sql_coupon_repository import SqlCouponRepository
from storefront.infrastructure.persistence.sql_customer_repository import SqlCustomerRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Opens a fresh session on every ``with`` block.

    Any SQLAlchemy error escaping the block, including one raised by
    ``commit()``, is logged with its driver detail and re-raised as a
    StorageError carrying a generic message, after the rollback.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> UnitOfWork:
        self._session = self._session_factory()
        self.carts = SqlCartRepository(self._session)
        self.catalog = SqlCatalog(self._session)
        self.coupons = SqlCouponRepository(self._session)
        self.customers = SqlCustomerRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return super().__enter__()

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()
            self._session = None

        if exc is not None and isinstance(exc, SQLAlchemyError):
            logger.error("Storage failure, unit of work rolled back", exc_info=exc)
            raise StorageError("Internal storage error") from exc

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
