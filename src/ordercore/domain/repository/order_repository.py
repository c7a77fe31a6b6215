"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ordercore.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):
    """Owns every order after creation.

    Implementations hand out copies: mutating a returned ``Order`` has no
    effect until it is written back with ``replace``.
    """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Store a new order.  Raises ConflictError if the ID is taken."""

    @abstractmethod
    def replace(self, order: Order) -> None:
        """Overwrite an existing order atomically.

        Raises NotFoundError if no order with that ID exists.
        """

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.customer_id == customer_id]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return [o for o in self.list_all() if o.status == status]

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        """Orders created within ``[start, end]`` (both inclusive)."""
        return [o for o in self.list_all() if start <= o.created_at <= end]
