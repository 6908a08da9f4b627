"""Abstract repository for Coupon."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.coupon import Coupon


class CouponRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> Coupon | None:
        """Return a coupon by its exact code, or None if not found."""

    @abstractmethod
    def add(self, coupon: Coupon) -> None:
        """Persist a new coupon.  Raises ConflictError on a duplicate code."""
