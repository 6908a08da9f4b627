"""Abstract repository for the per-customer cart (the cart ledger)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity


class CartRepository(ABC):

    @abstractmethod
    def list_lines(self, customer_id: int, *, for_update: bool = False) -> list[CartLine]:
        """Return the customer's lines in insertion order.

        With ``for_update`` the backend should lock the rows until the
        enclosing unit of work ends, where it supports row locks.
        """

    @abstractmethod
    def add_or_merge(self, customer_id: int, product_id: int, quantity: Quantity) -> None:
        """Insert a line or add ``quantity`` to the existing one, atomically."""

    @abstractmethod
    def set_quantity(self, customer_id: int, product_id: int, quantity: Quantity) -> bool:
        """Overwrite a line's quantity.  Return False if the line is absent."""

    @abstractmethod
    def remove(self, customer_id: int, product_id: int) -> None:
        """Delete one line; no-op if absent."""

    @abstractmethod
    def clear(self, customer_id: int) -> int:
        """Delete every line of the customer and return how many went."""

    @abstractmethod
    def consume(self, customer_id: int, lines: list[CartLine]) -> int:
        """Delete exactly the given ``(product_id, quantity)`` lines.

        Returns the number of rows deleted.  A result smaller than
        ``len(lines)`` means the cart changed since it was read.
        """
