"""Integration tests for order status updates."""

import pytest

from ordercore.domain.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ordercore.domain.model.order import OrderStatus
from tests.fakes import RecordingLogger, build_coordinator


def _setup(**kwargs):
    coordinator, order_repo, _ = build_coordinator(**kwargs)
    order_id = coordinator.create_order("C1", "Alice").id
    coordinator.add_item(order_id, "P1", 1)
    return coordinator, order_repo, order_id


class TestUpdateStatus:

    def test_delivered_from_pending_is_rejected(self):
        coordinator, _, order_id = _setup()
        with pytest.raises(InvalidTransitionError, match="from PENDING to DELIVERED"):
            coordinator.update_status(order_id, OrderStatus.DELIVERED)
        assert coordinator.get_order(order_id).status == OrderStatus.PENDING

    def test_processing_then_shipped(self):
        coordinator, _, order_id = _setup()
        coordinator.update_status(order_id, OrderStatus.PROCESSING)
        coordinator.update_status(order_id, OrderStatus.SHIPPED)
        assert coordinator.get_order(order_id).status == OrderStatus.SHIPPED

    def test_full_lifecycle_with_string_statuses(self):
        coordinator, _, order_id = _setup()
        for status in ("processing", "Shipped", "DELIVERED"):
            coordinator.update_status(order_id, status)
        assert coordinator.get_order(order_id).status == OrderStatus.DELIVERED

    @pytest.mark.parametrize("before", [[], ["PROCESSING"], ["PROCESSING", "SHIPPED"]])
    def test_cancel_before_delivery(self, before):
        coordinator, _, order_id = _setup()
        for status in before:
            coordinator.update_status(order_id, status)
        coordinator.update_status(order_id, OrderStatus.CANCELLED)
        assert coordinator.get_order(order_id).status == OrderStatus.CANCELLED

    def test_delivered_cannot_be_cancelled(self):
        coordinator, _, order_id = _setup()
        for status in ("PROCESSING", "SHIPPED", "DELIVERED"):
            coordinator.update_status(order_id, status)
        with pytest.raises(InvalidTransitionError):
            coordinator.update_status(order_id, OrderStatus.CANCELLED)

    def test_unknown_status_name(self):
        coordinator, _, order_id = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            coordinator.update_status(order_id, "LOST")

    def test_unknown_order(self):
        coordinator, _, _ = _setup()
        with pytest.raises(NotFoundError):
            coordinator.update_status("missing", OrderStatus.PROCESSING)

    def test_logs_transition(self):
        logger = RecordingLogger()
        coordinator, _, order_id = _setup(logger=logger)
        coordinator.update_status(order_id, OrderStatus.PROCESSING)
        assert (
            "info",
            "status_updated",
            {"order_id": order_id, "previous": "PENDING", "status": "PROCESSING"},
        ) in logger.events
