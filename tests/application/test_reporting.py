"""Tests for the ReportingEngine (sales report and low-stock alerts)."""

from datetime import date, datetime, timezone

import pytest

from storefront.application.cart_ledger import CartLedger
from storefront.application.order_ledger import OrderLedger
from storefront.application.reporting import ReportingEngine
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import ALICE, BOB, fixed_clock, make_uow


def _place(uow, customer_id: int, lines: dict[int, int], when: datetime, coupon: str | None = None) -> None:
    carts = CartLedger(uow)
    for product_id, qty in lines.items():
        carts.add_or_merge_line(customer_id, product_id, qty)
    OrderLedger(uow, clock=fixed_clock(when)).place_order(customer_id, "12 Market St", coupon)


def _at(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 6, day, hour, 0, tzinfo=timezone.utc)


class TestSalesReport:

    def test_aggregates_per_product(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 2, 2: 1}, _at(10))
        _place(uow, BOB, {1: 3}, _at(11))

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert [(r.product_id, r.name, r.total_quantity_sold, r.revenue) for r in rows] == [
            (1, "Widget", 5, "50.00"),
            (2, "Gadget", 1, "25.00"),
        ]

    def test_sum_of_revenue_equals_sum_of_line_totals(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 2, 2: 3, 3: 1}, _at(10))
        _place(uow, BOB, {2: 1, 3: 4}, _at(12))

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        line_totals = sum(
            (item.line_total.amount for order in uow.orders.all() for item in order.items),
        )
        assert sum(Money.of(r.revenue).amount for r in rows) == line_totals

    def test_revenue_uses_snapshotted_prices(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 2}, _at(10))
        uow.catalog.set_price(1, "1000.00")

        [row] = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert row.revenue == "20.00"

    def test_revenue_ignores_coupon_discount(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 2}, _at(10), coupon="SAVE10")

        [row] = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert row.revenue == "20.00"

    def test_end_date_is_inclusive(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 1}, datetime(2024, 6, 30, 23, 59, tzinfo=timezone.utc))
        _place(uow, BOB, {2: 1}, datetime(2024, 7, 1, 0, 0, tzinfo=timezone.utc))

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert [r.product_id for r in rows] == [1]

    def test_start_date_is_inclusive(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 1}, datetime(2024, 6, 1, 0, 0, tzinfo=timezone.utc))
        _place(uow, BOB, {2: 1}, datetime(2024, 5, 31, 23, 59, tzinfo=timezone.utc))

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 1))

        assert [r.product_id for r in rows] == [1]

    def test_ordered_by_revenue_descending(self):
        uow = make_uow()
        _place(uow, ALICE, {3: 1, 2: 1, 1: 1}, _at(10))  # 5, 25, 10

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert [r.product_id for r in rows] == [2, 1, 3]

    def test_paid_and_pending_orders_both_count(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 1}, _at(10))
        OrderLedger(uow).pay(1, ALICE, "credit_card")
        _place(uow, BOB, {1: 1}, _at(11))

        [row] = ReportingEngine(uow).sales_report(date(2024, 6, 1), date(2024, 6, 30))

        assert row.total_quantity_sold == 2

    def test_empty_window(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 1}, _at(10))
        assert ReportingEngine(uow).sales_report(date(2024, 1, 1), date(2024, 1, 31)) == []

    def test_end_date_at_calendar_limit(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 2}, _at(10))

        rows = ReportingEngine(uow).sales_report(date(2024, 6, 1), date.max)

        assert [(r.product_id, r.total_quantity_sold) for r in rows] == [(1, 2)]

    def test_single_day_window_at_calendar_limit(self):
        uow = make_uow()
        _place(uow, ALICE, {1: 1}, _at(10))
        assert ReportingEngine(uow).sales_report(date.max, date.max) == []

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError, match="after end date"):
            ReportingEngine(make_uow()).sales_report(date(2024, 6, 30), date(2024, 6, 1))


class TestLowStockAlerts:

    def test_default_threshold_is_inclusive(self):
        # Widget 50, Gadget 4, Gizmo 10
        alerts = ReportingEngine(make_uow()).low_stock_alerts()
        assert [(a.id, a.name, a.stock_quantity) for a in alerts] == [
            (2, "Gadget", 4),
            (3, "Gizmo", 10),
        ]

    def test_custom_threshold(self):
        alerts = ReportingEngine(make_uow()).low_stock_alerts(threshold=4)
        assert [a.id for a in alerts] == [2]

    def test_ties_ordered_by_id(self):
        uow = make_uow(products=[
            Product(id=9, name="Nine", price=Money.of("1.00"), stock_quantity=0),
            Product(id=4, name="Four", price=Money.of("1.00"), stock_quantity=0),
        ])
        assert [a.id for a in ReportingEngine(uow).low_stock_alerts(0)] == [4, 9]

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ReportingEngine(make_uow()).low_stock_alerts(-1)
