"""Coupon: a discount code with an inclusive validity window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Percentage


@dataclass(frozen=True)
class Coupon:
    """Immutable once created.

    Invariants:
    - ``code`` is non-blank
    - ``valid_from <= valid_to``
    """

    code: str
    discount_percent: Percentage
    valid_from: date
    valid_to: date

    @staticmethod
    def create(
        code: str,
        discount_percent: Percentage,
        valid_from: date,
        valid_to: date,
    ) -> Coupon:
        """Create a new coupon, enforcing all invariants."""
        if not code or not code.strip():
            raise ValidationError("Coupon code is required")
        if valid_from > valid_to:
            raise ValidationError(
                f"Coupon window is empty: valid_from {valid_from} is after valid_to {valid_to}"
            )
        return Coupon(
            code=code.strip(),
            discount_percent=discount_percent,
            valid_from=valid_from,
            valid_to=valid_to,
        )

    def is_valid_on(self, as_of: date) -> bool:
        return self.valid_from <= as_of <= self.valid_to
