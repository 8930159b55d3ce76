"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidAmountError(ValidationError):
    """A quantity or amount is zero, negative or otherwise unusable."""


class InsufficientStockError(ValidationError):
    """The requested quantity exceeds the live stock of a product."""

    def __init__(self, product_code: str, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )
        self.product_code = product_code
        self.requested = requested
        self.available = available


class DuplicateEntityError(ValidationError):
    """An entity with the same key is already registered."""


class DuplicateCodeError(DuplicateEntityError):
    """A product with the same code is already in the catalog."""


class DuplicateIdError(DuplicateEntityError):
    """A customer with the same id is already registered."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PaymentDeclinedError(DomainException):
    """The payment method refused to settle the amount."""
