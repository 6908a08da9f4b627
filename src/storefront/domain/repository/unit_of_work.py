"""Abstract unit of work.

Groups the repositories that share one storage transaction.  Leaving the
``with`` block without calling ``commit()``, normally or through an
exception, rolls every write back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog import Catalog
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    carts: CartRepository
    catalog: Catalog
    coupons: CouponRepository
    customers: CustomerRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes.  No-op after a commit."""
