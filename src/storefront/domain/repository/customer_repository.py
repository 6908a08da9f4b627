"""Abstract lookup of customer identities (owned by the identity service)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CustomerRepository(ABC):

    @abstractmethod
    def get_admin_flag(self, customer_id: int) -> bool | None:
        """Return the customer's admin flag, or None if the customer is unknown."""
