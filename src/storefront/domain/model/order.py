"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; the storage layer only has
to make the resulting writes atomic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import OrderNotPayableError, ValidationError
from storefront.domain.model.value_objects import Money, Percentage, Quantity


class OrderStatus(Enum):
    """States of the regular transition machine.

    Admins may overwrite the status with any other label (``Shipped``,
    ``Cancelled``, ...), so ``Order.status`` is stored as a plain string.
    """

    PENDING = "Pending"
    PAID = "Paid"


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at order-placement time.

    Immutable: ``quantity`` and ``unit_price`` never change after the
    order is placed (price lock preserved).
    """

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_id: int
    shipping_address: str
    items: list[OrderLine]
    status: str = OrderStatus.PENDING.value
    payment_method: str | None = None
    coupon_code: str | None = None
    discount_percent: Percentage = field(default_factory=Percentage.none)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: int,
        shipping_address: str,
        items: list[OrderLine],
        coupon_code: str | None = None,
        discount_percent: Percentage | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new Pending order, enforcing all invariants."""
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        product_ids = [item.product_id for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("Order lines must reference distinct products")

        return Order(
            id=None,
            customer_id=customer_id,
            shipping_address=shipping_address.strip(),
            items=list(items),
            coupon_code=coupon_code,
            discount_percent=discount_percent or Percentage.none(),
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def pay(self, payment_method: str) -> None:
        """Transition Pending -> Paid and record the payment method.

        The repository must persist this with a compare-and-set on the
        Pending status so that concurrent payments cannot both succeed.
        """
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")
        if not self.is_pending:
            raise OrderNotPayableError(
                f"Cannot pay order #{self.id}: current status is {self.status}, "
                f"expected {OrderStatus.PENDING.value}"
            )
        self.status = OrderStatus.PAID.value
        self.payment_method = payment_method.strip()

    def override_status(self, new_status: str) -> None:
        """Privileged, unconditional status overwrite.

        Deliberately bypasses the transition rules of ``pay()``; only the
        admin path calls this.
        """
        if not new_status or not new_status.strip():
            raise ValidationError("Status is required")
        self.status = new_status.strip()

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def discount(self) -> Money:
        return self.subtotal.percentage(self.discount_percent)

    @property
    def total(self) -> Money:
        return self.subtotal - self.discount

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING.value
