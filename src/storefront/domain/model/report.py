"""Read-side aggregates produced by reporting queries."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductSales:
    """Units sold and revenue for one product over a reporting window.

    Revenue is computed from the snapshotted unit prices on order lines,
    never from the current catalog price.
    """

    product_id: int
    name: str
    total_quantity_sold: int
    revenue: Money
