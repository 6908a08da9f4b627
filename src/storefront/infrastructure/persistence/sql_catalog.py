"""SQLAlchemy read-only implementation of Catalog."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog import Catalog
from storefront.infrastructure.persistence.models import ProductRow


class SqlCatalog(Catalog):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row is not None else None

    def get_many(self, product_ids: list[int]) -> dict[int, Product]:
        if not product_ids:
            return {}
        rows = self._session.scalars(
            select(ProductRow).where(ProductRow.id.in_(set(product_ids)))
        )
        return {row.id: self._to_domain(row) for row in rows}

    def list_low_stock(self, threshold: int) -> list[Product]:
        rows = self._session.scalars(
            select(ProductRow)
            .where(ProductRow.stock_quantity <= threshold)
            .order_by(ProductRow.stock_quantity.asc(), ProductRow.id.asc())
        )
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(Decimal(str(row.price))),
            stock_quantity=row.stock_quantity,
        )
