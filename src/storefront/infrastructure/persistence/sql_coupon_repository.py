"""SQLAlchemy implementation of CouponRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.value_objects import Percentage
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.infrastructure.persistence.models import CouponRow


class SqlCouponRepository(CouponRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_code(self, code: str) -> Coupon | None:
        row = self._session.scalars(
            select(CouponRow).where(CouponRow.code == code)
        ).first()
        return self._to_domain(row) if row is not None else None

    def add(self, coupon: Coupon) -> None:
        self._session.add(
            CouponRow(
                code=coupon.code,
                discount_percent=coupon.discount_percent.value,
                valid_from=coupon.valid_from,
                valid_to=coupon.valid_to,
            )
        )
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Coupon '{coupon.code}' already exists") from exc

    @staticmethod
    def _to_domain(row: CouponRow) -> Coupon:
        return Coupon(
            code=row.code,
            discount_percent=Percentage(Decimal(str(row.discount_percent))),
            valid_from=row.valid_from,
            valid_to=row.valid_to,
        )
