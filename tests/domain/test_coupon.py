"""Unit tests for the Coupon entity and the CouponValidator domain service."""

from datetime import date
from decimal import Decimal

import pytest

from storefront.domain.exceptions import CouponInvalidError, ValidationError
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.value_objects import Percentage
from storefront.domain.service.coupon_validator import CouponValidator
from tests.fakes import FakeCouponRepository


def _coupon(code: str = "SAVE10", pct: str = "10", start=date(2024, 1, 1), end=date(2024, 12, 31)) -> Coupon:
    return Coupon.create(code, Percentage.of(pct), start, end)


class TestCouponCreation:

    def test_happy_path(self):
        coupon = _coupon()
        assert coupon.code == "SAVE10"
        assert coupon.discount_percent == Percentage.of(10)

    def test_code_is_stripped(self):
        assert _coupon(code=" SAVE10 ").code == "SAVE10"

    def test_blank_code_rejected(self):
        with pytest.raises(ValidationError, match="Coupon code is required"):
            _coupon(code="  ")

    def test_empty_window_rejected(self):
        with pytest.raises(ValidationError, match="window is empty"):
            _coupon(start=date(2024, 2, 1), end=date(2024, 1, 31))

    def test_single_day_window_allowed(self):
        coupon = _coupon(start=date(2024, 5, 5), end=date(2024, 5, 5))
        assert coupon.is_valid_on(date(2024, 5, 5))


class TestCouponValidator:

    def _validator(self, *coupons: Coupon) -> CouponValidator:
        return CouponValidator(FakeCouponRepository(list(coupons) or [_coupon()]))

    def test_returns_discount_rate(self):
        assert self._validator().validate("SAVE10", as_of=date(2024, 6, 1)).value == Decimal("10")

    def test_first_day_is_valid(self):
        assert self._validator().validate("SAVE10", as_of=date(2024, 1, 1)) == Percentage.of(10)

    def test_last_day_is_valid(self):
        assert self._validator().validate("SAVE10", as_of=date(2024, 12, 31)) == Percentage.of(10)

    def test_day_before_window_rejected(self):
        with pytest.raises(CouponInvalidError, match="Invalid or expired coupon"):
            self._validator().validate("SAVE10", as_of=date(2023, 12, 31))

    def test_day_after_window_rejected(self):
        with pytest.raises(CouponInvalidError, match="valid 2024-01-01 to 2024-12-31"):
            self._validator().validate("SAVE10", as_of=date(2025, 1, 1))

    def test_unknown_code_rejected(self):
        with pytest.raises(CouponInvalidError, match="'NOPE'"):
            self._validator().validate("NOPE", as_of=date(2024, 6, 1))

    def test_codes_are_case_sensitive(self):
        with pytest.raises(CouponInvalidError):
            self._validator().validate("save10", as_of=date(2024, 6, 1))

    def test_surrounding_whitespace_ignored(self):
        assert self._validator().validate(" SAVE10 ", as_of=date(2024, 6, 1)) == Percentage.of(10)

    def test_defaults_to_today(self):
        today_coupon = _coupon(code="TODAY", start=date(2000, 1, 1), end=date(2999, 12, 31))
        assert self._validator(today_coupon).validate("TODAY") == Percentage.of(10)

    def test_validation_does_not_consume_coupon(self):
        validator = self._validator()
        for _ in range(3):
            validator.validate("SAVE10", as_of=date(2024, 6, 1))
