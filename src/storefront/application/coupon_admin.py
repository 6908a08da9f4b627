"""Application service: coupon creation and dry-run application."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import structlog

from storefront.application.dto import CouponDTO
from storefront.domain.exceptions import ConflictError
from storefront.domain.model.auth import AuthContext
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.value_objects import Percentage
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.coupon_validator import CouponValidator

logger = structlog.get_logger(__name__)


class CouponAdmin:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def create_coupon(
        self,
        auth: AuthContext,
        code: str,
        discount_percent: str | int | Decimal,
        valid_from: date,
        valid_to: date,
    ) -> CouponDTO:
        """Create a coupon (admin only).  Codes are unique."""
        auth.require_admin()

        coupon = Coupon.create(
            code=code,
            discount_percent=Percentage.of(discount_percent),
            valid_from=valid_from,
            valid_to=valid_to,
        )

        with self._uow as uow:
            if uow.coupons.get_by_code(coupon.code) is not None:
                raise ConflictError(f"Coupon '{coupon.code}' already exists")
            uow.coupons.add(coupon)
            uow.commit()

        logger.info("Coupon created", code=coupon.code, admin_id=auth.customer_id)
        return self._to_dto(coupon)

    def apply_coupon(self, code: str, as_of: date | None = None) -> str:
        """Dry-run: return the discount percent ``code`` would grant now."""
        with self._uow as uow:
            percent = CouponValidator(uow.coupons).validate(code, as_of=as_of)
        return f"{percent.value:.2f}"

    @staticmethod
    def _to_dto(coupon: Coupon) -> CouponDTO:
        return CouponDTO(
            code=coupon.code,
            discount_percent=f"{coupon.discount_percent.value:.2f}",
            valid_from=coupon.valid_from,
            valid_to=coupon.valid_to,
        )
