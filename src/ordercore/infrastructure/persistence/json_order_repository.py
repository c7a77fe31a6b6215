"""JSON-file-backed implementation of OrderRepository.

Lets the CLI keep orders between invocations.  A process-local lock
serializes every read-modify-write of the file; there is no protection
against two processes writing at once.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ordercore.domain.exceptions import ConflictError, NotFoundError
from ordercore.domain.model.order import Order, OrderLineItem, OrderStatus
from ordercore.domain.model.value_objects import Money, Quantity
from ordercore.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == order_id:
                    return self._to_domain(raw)
        return None

    def insert(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()
            if any(raw["id"] == order.id for raw in orders):
                raise ConflictError("Order", order.id)
            orders.append(self._to_raw(order))
            self._persist_raw(orders)

    def replace(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                raise NotFoundError("Order", order.id)
            self._persist_raw(orders)

    def list_all(self) -> list[Order]:
        with self._lock:
            orders = [self._to_domain(raw) for raw in self._load_raw()]
        return sorted(orders, key=lambda o: o.created_at)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "customer_name": order.customer_name,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "payment_method": order.payment_method,
            "currency": order.currency,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            customer_name=raw["customer_name"],
            items=items,
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            payment_method=raw.get("payment_method"),
            currency=currency,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
