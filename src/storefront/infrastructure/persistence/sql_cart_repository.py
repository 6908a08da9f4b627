"""SQLAlchemy implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.models import CartLineRow

# Dialects offering INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def list_lines(self, customer_id: int, *, for_update: bool = False) -> list[CartLine]:
        stmt = (
            select(CartLineRow)
            .where(CartLineRow.customer_id == customer_id)
            .order_by(CartLineRow.id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add_or_merge(self, customer_id: int, product_id: int, quantity: Quantity) -> None:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Atomic cart upsert is not supported on '{dialect}'")

        stmt = insert(CartLineRow).values(
            customer_id=customer_id,
            product_id=product_id,
            quantity=quantity.value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["customer_id", "product_id"],
            set_={"quantity": CartLineRow.quantity + stmt.excluded.quantity},
        )
        self._session.execute(stmt)

    def set_quantity(self, customer_id: int, product_id: int, quantity: Quantity) -> bool:
        result = self._session.execute(
            update(CartLineRow)
            .where(
                CartLineRow.customer_id == customer_id,
                CartLineRow.product_id == product_id,
            )
            .values(quantity=quantity.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def remove(self, customer_id: int, product_id: int) -> None:
        self._session.execute(
            delete(CartLineRow)
            .where(
                CartLineRow.customer_id == customer_id,
                CartLineRow.product_id == product_id,
            )
            .execution_options(synchronize_session=False)
        )

    def clear(self, customer_id: int) -> int:
        result = self._session.execute(
            delete(CartLineRow)
            .where(CartLineRow.customer_id == customer_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def consume(self, customer_id: int, lines: list[CartLine]) -> int:
        if not lines:
            return 0
        result = self._session.execute(
            delete(CartLineRow)
            .where(
                CartLineRow.customer_id == customer_id,
                or_(
                    *(
                        and_(
                            CartLineRow.product_id == line.product_id,
                            CartLineRow.quantity == line.quantity.value,
                        )
                        for line in lines
                    )
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: CartLineRow) -> CartLine:
        return CartLine(
            customer_id=row.customer_id,
            product_id=row.product_id,
            quantity=Quantity(row.quantity),
        )
