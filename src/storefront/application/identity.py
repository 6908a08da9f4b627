"""Application service: resolve the per-request identity context."""

from __future__ import annotations

from storefront.domain.exceptions import AuthenticationError
from storefront.domain.model.auth import AuthContext
from storefront.domain.repository.unit_of_work import UnitOfWork


class IdentityProvider:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def resolve(self, customer_id: int | None) -> AuthContext:
        """Build the AuthContext of an already-authenticated customer.

        Token verification happens upstream; this only loads the admin
        capability once so later operations never query it again.
        """
        if customer_id is None:
            raise AuthenticationError("No authenticated customer")

        with self._uow as uow:
            is_admin = uow.customers.get_admin_flag(customer_id)

        if is_admin is None:
            raise AuthenticationError(f"Unknown customer #{customer_id}")
        return AuthContext(customer_id=customer_id, is_admin=is_admin)
