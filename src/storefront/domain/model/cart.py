"""Cart lines: the customer's mutable pre-checkout selections."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class CartLine:
    """One product selection in a customer's cart.

    Unique per ``(customer_id, product_id)``.  Lines are replaced rather
    than mutated; the repository is the single writer.
    """

    customer_id: int
    product_id: int
    quantity: Quantity

    @property
    def key(self) -> tuple[int, int]:
        return (self.product_id, self.quantity.value)
