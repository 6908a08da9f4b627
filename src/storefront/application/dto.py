"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals to the outside world.  Monetary amounts
are plain decimal strings (``"25.00"``) so they survive JSON unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a cart line, enriched with the product's *current* data."""

    product_id: int
    quantity: int
    name: str | None  # None if the product has left the catalog
    unit_price: str | None


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line with its snapshotted price."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: int
    customer_id: int
    status: str
    shipping_address: str
    payment_method: str | None
    coupon_code: str | None
    discount_percent: str
    items: list[OrderLineDTO]
    subtotal: str
    discount: str
    total: str
    created_at: datetime


@dataclass(frozen=True)
class SalesReportRowDTO:
    product_id: int
    name: str
    total_quantity_sold: int
    revenue: str


@dataclass(frozen=True)
class StockAlertDTO:
    id: int
    name: str
    stock_quantity: int


@dataclass(frozen=True)
class CouponDTO:
    code: str
    discount_percent: str
    valid_from: date
    valid_to: date
