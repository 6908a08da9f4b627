"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.order import Order
from storefront.domain.model.report import ProductSales


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and its lines; assigns ``order.id``."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_for_customer(self, order_id: int, customer_id: int) -> Order | None:
        """Return the order only if it belongs to ``customer_id``."""

    @abstractmethod
    def list_for_customer(self, customer_id: int) -> list[Order]:
        """Return the customer's orders, newest first."""

    @abstractmethod
    def save_payment(self, order: Order, expected_status: str) -> bool:
        """Persist ``order.status`` and ``order.payment_method``.

        Compare-and-set: the write only happens if the stored status still
        equals ``expected_status``.  Returns False when it does not.
        """

    @abstractmethod
    def save_status(self, order: Order) -> bool:
        """Unconditionally persist ``order.status``.  False if the order is gone."""

    @abstractmethod
    def sales_between(self, start: datetime, end: datetime) -> list[ProductSales]:
        """Aggregate order lines of orders created in ``[start, end)`` per product.

        Ordered by revenue descending, then product ID.
        """
