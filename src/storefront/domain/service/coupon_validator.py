"""Domain service: Coupon validation.

Pure lookup against the coupon repository; validating a code never
mutates coupon state (there is no redemption counting).
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from storefront.domain.exceptions import CouponInvalidError
from storefront.domain.model.value_objects import Percentage
from storefront.domain.repository.coupon_repository import CouponRepository


class CouponValidator:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def validate(self, code: str, as_of: date | None = None) -> Percentage:
        """Return the discount rate of ``code`` on ``as_of`` (default: today, UTC).

        The validity window is inclusive at both ends.  Raises
        CouponInvalidError for an unknown code or a date outside the window.
        """
        if as_of is None:
            as_of = datetime.now(timezone.utc).date()

        coupon = self._coupon_repo.get_by_code(code.strip()) if code else None
        if coupon is None:
            raise CouponInvalidError(f"Invalid or expired coupon: '{code}'")
        if not coupon.is_valid_on(as_of):
            raise CouponInvalidError(
                f"Invalid or expired coupon: '{code}' "
                f"(valid {coupon.valid_from} to {coupon.valid_to})"
            )
        return coupon.discount_percent
