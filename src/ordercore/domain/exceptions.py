"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass builds its message from a fixed template, so callers can tell
a stock shortage apart from a terminal validation mistake by type alone.

A declined payment is *not* an exception: see ``PaymentOutcome``.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input; the caller must fix it before retrying."""


class NotFoundError(DomainException):
    """A requested order or product does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' not found")


class InsufficientStockError(DomainException):
    """Not enough stock to satisfy a reservation."""

    def __init__(self, product_id: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(available {available}, requested {requested})"
        )


class InvalidStateError(DomainException):
    """The operation is not legal for the order's current status."""


class InvalidTransitionError(DomainException):
    """An illegal order status change was requested."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move order from {current} to {requested}")


class ConflictError(DomainException):
    """An entity with the same identifier already exists."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' already exists")
