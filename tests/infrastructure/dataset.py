"""Reference rows owned by the identity and catalog services."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from storefront.infrastructure.persistence.models import CouponRow, CustomerRow, ProductRow
from tests.fakes import ADMIN, ALICE, BOB


def seed(session_factory) -> None:
    """Customers, products and coupons for the SQLite-backed tests."""
    with session_factory() as session:
        session.add_all([
            CustomerRow(id=ALICE, is_admin=False),
            CustomerRow(id=BOB, is_admin=False),
            CustomerRow(id=ADMIN, is_admin=True),
            ProductRow(id=1, name="Widget", price=Decimal("10.00"), stock_quantity=50),
            ProductRow(id=2, name="Gadget", price=Decimal("25.00"), stock_quantity=4),
            ProductRow(id=3, name="Gizmo", price=Decimal("5.00"), stock_quantity=10),
            CouponRow(
                code="SAVE10",
                discount_percent=Decimal("10"),
                valid_from=date(2024, 1, 1),
                valid_to=date(2024, 12, 31),
            ),
            CouponRow(
                code="FOREVER15",
                discount_percent=Decimal("15"),
                valid_from=date(2000, 1, 1),
                valid_to=date(2999, 12, 31),
            ),
        ])
        session.commit()
