"""Integration tests for the read-only order queries."""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from ordercore.domain.exceptions import NotFoundError, ValidationError
from ordercore.domain.model.order import Order, OrderStatus
from ordercore.infrastructure.persistence.memory_order_repository import (
    InMemoryOrderRepository,
)
from tests.fakes import build_coordinator

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _seeded():
    orders = [
        Order(id="A", customer_id="C1", customer_name="Alice", created_at=T0),
        Order(id="B", customer_id="C2", customer_name="Bob", created_at=T0 + timedelta(days=1)),
        Order(
            id="C",
            customer_id="C1",
            customer_name="Alice",
            created_at=T0 + timedelta(days=2),
            status=OrderStatus.CANCELLED,
        ),
    ]
    coordinator, _, _ = build_coordinator(order_repo=InMemoryOrderRepository(orders))
    return coordinator


class TestQueries:

    def test_get_missing_order(self):
        coordinator = _seeded()
        with pytest.raises(NotFoundError):
            coordinator.get_order("nope")

    def test_list_orders_oldest_first(self):
        assert [o.id for o in _seeded().list_orders()] == ["A", "B", "C"]

    def test_by_customer(self):
        assert [o.id for o in _seeded().list_orders_by_customer("C1")] == ["A", "C"]

    def test_by_status(self):
        coordinator = _seeded()
        assert [o.id for o in coordinator.list_orders_by_status(OrderStatus.PENDING)] == ["A", "B"]
        assert [o.id for o in coordinator.list_orders_by_status("cancelled")] == ["C"]

    def test_by_date_range_is_inclusive(self):
        coordinator = _seeded()
        found = coordinator.list_orders_by_date_range(T0, T0 + timedelta(days=1))
        assert [o.id for o in found] == ["A", "B"]

    def test_by_date_range_accepts_naive_utc(self):
        coordinator = _seeded()
        found = coordinator.list_orders_by_date_range(
            datetime(2026, 1, 2), datetime(2026, 1, 3)
        )
        assert [o.id for o in found] == ["B", "C"]

    def test_inverted_date_range(self):
        with pytest.raises(ValidationError, match="date range"):
            _seeded().list_orders_by_date_range(T0 + timedelta(days=1), T0)


class TestSnapshots:

    def test_dto_is_frozen(self):
        dto = _seeded().get_order("A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            dto.status = OrderStatus.DELIVERED

    def test_dto_does_not_follow_later_changes(self):
        coordinator, _, _ = build_coordinator()
        order_id = coordinator.create_order("C1", "Alice").id
        before = coordinator.get_order(order_id)

        coordinator.add_item(order_id, "P1", 2)

        assert before.items == ()
        assert len(coordinator.get_order(order_id).items) == 1

    def test_mutating_a_stored_copy_has_no_effect(self):
        coordinator, order_repo, _ = build_coordinator()
        order_id = coordinator.create_order("C1", "Alice").id

        leaked = order_repo.get_by_id(order_id)
        leaked.status = OrderStatus.DELIVERED

        assert coordinator.get_order(order_id).status == OrderStatus.PENDING
