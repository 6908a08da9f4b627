"""SQLAlchemy implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.infrastructure.persistence.models import CustomerRow


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_admin_flag(self, customer_id: int) -> bool | None:
        row = self._session.get(CustomerRow, customer_id)
        return bool(row.is_admin) if row is not None else None
