"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.report import ProductSales
from storefront.domain.model.value_objects import CENT, Money, Percentage, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.models import OrderLineRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        row = OrderRow(
            customer_id=order.customer_id,
            status=order.status,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            coupon_code=order.coupon_code,
            discount_percent=order.discount_percent.value,
            created_at=order.created_at,
            items=[
                OrderLineRow(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                )
                for item in order.items
            ],
        )
        self._session.add(row)
        self._session.flush()
        order.id = row.id

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.scalars(
            self._select_orders().where(OrderRow.id == order_id)
        ).first()
        return self._to_domain(row) if row is not None else None

    def get_for_customer(self, order_id: int, customer_id: int) -> Order | None:
        row = self._session.scalars(
            self._select_orders().where(
                OrderRow.id == order_id,
                OrderRow.customer_id == customer_id,
            )
        ).first()
        return self._to_domain(row) if row is not None else None

    def list_for_customer(self, customer_id: int) -> list[Order]:
        rows = self._session.scalars(
            self._select_orders()
            .where(OrderRow.customer_id == customer_id)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )
        return [self._to_domain(row) for row in rows]

    def save_payment(self, order: Order, expected_status: str) -> bool:
        result = self._session.execute(
            update(OrderRow)
            .where(
                OrderRow.id == order.id,
                OrderRow.customer_id == order.customer_id,
                OrderRow.status == expected_status,
            )
            .values(status=order.status, payment_method=order.payment_method)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def save_status(self, order: Order) -> bool:
        result = self._session.execute(
            update(OrderRow)
            .where(OrderRow.id == order.id)
            .values(status=order.status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def sales_between(self, start: datetime, end: datetime) -> list[ProductSales]:
        quantity_sold = func.sum(OrderLineRow.quantity).label("total_quantity_sold")
        revenue = func.sum(OrderLineRow.quantity * OrderLineRow.unit_price).label("revenue")

        stmt = (
            select(
                OrderLineRow.product_id,
                func.max(OrderLineRow.product_name).label("name"),
                quantity_sold,
                revenue,
            )
            .join(OrderRow, OrderLineRow.order_id == OrderRow.id)
            .where(OrderRow.created_at >= start, OrderRow.created_at < end)
            .group_by(OrderLineRow.product_id)
            .order_by(revenue.desc(), OrderLineRow.product_id.asc())
        )

        return [
            ProductSales(
                product_id=row.product_id,
                name=row.name,
                total_quantity_sold=int(row.total_quantity_sold),
                revenue=Money(Decimal(str(row.revenue)).quantize(CENT)),
            )
            for row in self._session.execute(stmt)
        ]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _select_orders():
        return select(OrderRow).options(selectinload(OrderRow.items))

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; everything is stored in UTC
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Order(
            id=row.id,
            customer_id=row.customer_id,
            shipping_address=row.shipping_address,
            items=[
                OrderLine(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=Quantity(item.quantity),
                    unit_price=Money(Decimal(str(item.unit_price))),
                )
                for item in row.items
            ],
            status=row.status,
            payment_method=row.payment_method,
            coupon_code=row.coupon_code,
            discount_percent=Percentage(Decimal(str(row.discount_percent))),
            created_at=created_at,
        )
