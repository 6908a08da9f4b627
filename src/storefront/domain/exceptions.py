"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and translate them into
status codes or user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart with no lines."""


class CouponInvalidError(ValidationError):
    """The coupon code does not exist or is outside its validity window."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """A cart line references a product that is no longer in the catalog."""


class AuthenticationError(DomainException):
    """No authenticated customer could be resolved for the request."""


class ForbiddenError(DomainException):
    """The caller lacks the privilege required by the operation."""


class ConflictError(DomainException):
    """The operation conflicts with the current state of an entity."""


class OrderNotPayableError(ConflictError):
    """Payment was attempted on an order that is not Pending."""


class CheckoutConflictError(ConflictError):
    """The cart changed or was consumed by a concurrent checkout."""


class StorageError(DomainException):
    """The storage layer failed; the enclosing unit of work was rolled back."""
