"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error carries the offending entity so callers can report it precisely.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed or missing input, or a business rule was violated."""


class MissingCounterpartyError(ValidationError):
    """A PURCHASE order lacks a supplier or a SALES order lacks a customer."""

    def __init__(self, order_type: str, field: str) -> None:
        super().__init__(f"{field} is required for {order_type} orders")
        self.order_type = order_type
        self.field = field


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the unreserved stock, or an adjustment
    would drive on-hand quantity below zero."""

    def __init__(
        self,
        message: str,
        product_id: str | None = None,
        inventory_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.product_id = product_id
        self.inventory_id = inventory_id


class InvalidStateError(DomainException):
    """The entity's current status forbids the requested operation."""

    def __init__(self, message: str, current_status: str | None = None) -> None:
        super().__init__(message)
        self.current_status = current_status


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


NotFoundError = EntityNotFoundError


class DuplicateOrderNumberError(DomainException):
    """The generated order number is already taken; retry with a fresh one."""
