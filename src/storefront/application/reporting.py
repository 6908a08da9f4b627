"""Application service: admin reporting queries.

Read-only and lock-free.  Each query runs in its own short unit of work,
never inside a placement transaction, and may observe orders committed
while it runs.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from storefront.application.dto import SalesReportRowDTO, StockAlertDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.unit_of_work import UnitOfWork

DEFAULT_LOW_STOCK_THRESHOLD = 10


class ReportingEngine:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def sales_report(self, start_date: date, end_date: date) -> list[SalesReportRowDTO]:
        """Units sold and revenue per product for orders created in the window.

        Both dates are inclusive: the window runs from ``start_date`` 00:00
        UTC up to, but excluding, the day after ``end_date``.  Revenue is
        taken from the prices locked into the order lines.  An ``end_date``
        of ``date.max`` runs to the last representable instant.
        """
        if start_date > end_date:
            raise ValidationError(
                f"Start date {start_date} is after end date {end_date}"
            )

        start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        if end_date == date.max:
            end = datetime.max.replace(tzinfo=timezone.utc)
        else:
            end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)

        with self._uow as uow:
            rows = uow.orders.sales_between(start, end)

        return [
            SalesReportRowDTO(
                product_id=row.product_id,
                name=row.name,
                total_quantity_sold=row.total_quantity_sold,
                revenue=f"{row.revenue.amount:.2f}",
            )
            for row in rows
        ]

    def low_stock_alerts(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[StockAlertDTO]:
        """Products at or below ``threshold`` units, lowest stock first."""
        if threshold < 0:
            raise ValidationError("Threshold cannot be negative")

        with self._uow as uow:
            products = uow.catalog.list_low_stock(threshold)

        return [
            StockAlertDTO(id=p.id, name=p.name, stock_quantity=p.stock_quantity)
            for p in products
        ]
