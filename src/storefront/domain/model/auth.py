"""Per-request identity context."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ForbiddenError


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller, resolved once per request.

    Carries the admin capability so privileged operations never have to
    query the role again.
    """

    customer_id: int
    is_admin: bool = False

    def require_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError("Requires admin privileges")
