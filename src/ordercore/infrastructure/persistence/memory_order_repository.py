"""In-process implementation of OrderRepository.

Orders are stored and returned as deep copies, so nothing outside the
repository ever shares state with what is stored.
"""

from __future__ import annotations

import threading

from ordercore.domain.exceptions import ConflictError, NotFoundError
from ordercore.domain.model.order import Order
from ordercore.domain.repository.order_repository import OrderRepository


class InMemoryOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, Order] = {}
        for order in orders or []:
            self._store[order.id] = order.copy()

    def get_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            order = self._store.get(order_id)
            return order.copy() if order is not None else None

    def insert(self, order: Order) -> None:
        with self._lock:
            if order.id in self._store:
                raise ConflictError("Order", order.id)
            self._store[order.id] = order.copy()

    def replace(self, order: Order) -> None:
        with self._lock:
            if order.id not in self._store:
                raise NotFoundError("Order", order.id)
            self._store[order.id] = order.copy()

    def list_all(self) -> list[Order]:
        with self._lock:
            orders = [o.copy() for o in self._store.values()]
        return sorted(orders, key=lambda o: o.created_at)
