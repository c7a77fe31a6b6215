"""Integration tests for order creation.

Uses in-memory repositories — no file I/O.
"""

import pytest

from ordercore.application.order_coordinator import OrderCoordinator
from ordercore.domain.exceptions import ConflictError, ValidationError
from ordercore.domain.model.order import OrderStatus
from ordercore.infrastructure.persistence.memory_order_repository import (
    InMemoryOrderRepository,
)
from ordercore.infrastructure.persistence.memory_product_catalog import (
    InMemoryProductCatalog,
)
from tests.fakes import RecordingLogger, build_coordinator, make_settings


class TestCreateOrderHappyPath:

    def test_creates_pending_empty_order(self):
        coordinator, _, _ = build_coordinator()
        dto = coordinator.create_order("C1", "Alice")
        assert dto.status == OrderStatus.PENDING
        assert dto.items == ()
        assert str(dto.total) == "$0.00"
        assert dto.customer_id == "C1"
        assert dto.customer_name == "Alice"

    def test_persists_order(self):
        coordinator, order_repo, _ = build_coordinator()
        dto = coordinator.create_order("C1", "Alice")
        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.customer_name == "Alice"

    def test_ids_are_unique(self):
        coordinator, _, _ = build_coordinator()
        ids = {coordinator.create_order("C1", "Alice").id for _ in range(50)}
        assert len(ids) == 50

    def test_logs_creation(self):
        logger = RecordingLogger()
        coordinator, _, _ = build_coordinator(logger=logger)
        dto = coordinator.create_order("C1", "Alice")
        assert ("info", "order_created", {"order_id": dto.id, "customer_id": "C1", "customer_name": "Alice"}) in logger.events


class TestCreateOrderValidation:

    @pytest.mark.parametrize("customer_id, name", [("", "Alice"), ("C1", ""), ("C1", "  ")])
    def test_empty_inputs_rejected(self, customer_id, name):
        coordinator, order_repo, _ = build_coordinator()
        with pytest.raises(ValidationError, match="Customer"):
            coordinator.create_order(customer_id, name)
        assert order_repo.list_all() == []

    def test_duplicate_generated_id_is_a_conflict(self):
        logger = RecordingLogger()
        coordinator = OrderCoordinator(
            order_repo=InMemoryOrderRepository(),
            catalog=InMemoryProductCatalog(),
            settings=make_settings(),
            logger=logger,
            id_factory=lambda: "same-id",
        )
        coordinator.create_order("C1", "Alice")
        with pytest.raises(ConflictError, match="Order 'same-id' already exists"):
            coordinator.create_order("C2", "Bob")
        assert "create_order_failed" in logger.names("warning")
