"""Integration tests for committing payment on an order."""

from datetime import datetime

import pytest

from ordercore.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from ordercore.domain.model.order import OrderStatus
from ordercore.domain.model.payment import DECLINED, TIMED_OUT
from ordercore.domain.model.value_objects import Money
from ordercore.domain.payment.credit_card import CreditCardPayment
from tests.fakes import (
    BlockingGateway,
    DecliningGateway,
    ExplodingPaymentMethod,
    FailingOrderRepository,
    RecordingGateway,
    RecordingLogger,
    SpyPaymentMethod,
    build_coordinator,
    make_product,
)

CARD = {
    "cardNumber": "4111111111111111",
    "expiryDate": "12/30",
    "cvv": "123",
    "cardHolderName": "Alice Smith",
}


def _setup(items: int = 2, **kwargs):
    coordinator, order_repo, catalog = build_coordinator(
        [make_product("P1", price="10.00", stock=10)], **kwargs
    )
    order_id = coordinator.create_order("C1", "Alice").id
    if items:
        coordinator.add_item(order_id, "P1", items)
    return coordinator, order_repo, catalog, order_id


def _card_method(gateway):
    return CreditCardPayment(gateway, clock=lambda: datetime(2026, 10, 19), logger=RecordingLogger())


class TestCommitPaymentSuccess:

    def test_success_moves_order_to_processing(self):
        coordinator, _, _, order_id = _setup()
        gateway = RecordingGateway()

        outcome = coordinator.commit_payment(order_id, _card_method(gateway), CARD)

        assert outcome.success
        assert outcome.amount == Money.of("20.00")
        assert outcome.method == "Credit Card"
        dto = coordinator.get_order(order_id)
        assert dto.status == OrderStatus.PROCESSING
        assert dto.payment_method == "Credit Card"
        assert gateway.calls == [("Credit Card", Money.of("20.00"), "****-****-****-1111")]

    def test_validate_is_called_before_charge(self):
        coordinator, _, _, order_id = _setup()
        method = SpyPaymentMethod()
        coordinator.commit_payment(order_id, method, {})
        assert (method.validate_calls, method.charge_calls) == (1, 1)

    def test_second_commit_is_rejected_without_charging(self):
        coordinator, _, _, order_id = _setup()
        method = SpyPaymentMethod()
        coordinator.commit_payment(order_id, method, {})

        with pytest.raises(InvalidStateError, match="PROCESSING"):
            coordinator.commit_payment(order_id, method, {})
        assert method.charge_calls == 1


class TestCommitPaymentRejected:

    def test_empty_order_makes_no_payment_call(self):
        coordinator, _, _, order_id = _setup(items=0)
        method = SpyPaymentMethod()

        with pytest.raises(InvalidStateError, match="no items"):
            coordinator.commit_payment(order_id, method, {})
        assert (method.validate_calls, method.charge_calls) == (0, 0)

    def test_invalid_details_never_charge(self):
        coordinator, _, _, order_id = _setup()
        method = SpyPaymentMethod(valid=False)

        with pytest.raises(ValidationError, match="Invalid payment details for Spy"):
            coordinator.commit_payment(order_id, method, {})
        assert method.charge_calls == 0
        assert coordinator.get_order(order_id).status == OrderStatus.PENDING

    def test_malformed_card_rejected_before_gateway(self):
        coordinator, _, _, order_id = _setup()
        gateway = RecordingGateway()
        with pytest.raises(ValidationError):
            coordinator.commit_payment(order_id, _card_method(gateway), {**CARD, "cvv": "12"})
        assert gateway.calls == []

    def test_unknown_order(self):
        coordinator, _, _, _ = _setup()
        with pytest.raises(NotFoundError):
            coordinator.commit_payment("missing", SpyPaymentMethod(), {})

    def test_cancelled_order_cannot_be_paid(self):
        coordinator, _, _, order_id = _setup()
        coordinator.update_status(order_id, OrderStatus.CANCELLED)
        with pytest.raises(InvalidStateError, match="CANCELLED"):
            coordinator.commit_payment(order_id, SpyPaymentMethod(), {})


class TestCommitPaymentDeclined:

    def test_decline_is_an_outcome_and_order_stays_pending(self):
        logger = RecordingLogger()
        coordinator, _, catalog, order_id = _setup(logger=logger)

        outcome = coordinator.commit_payment(
            order_id, SpyPaymentMethod(DecliningGateway()), {}
        )

        assert not outcome.success
        assert outcome.reason == DECLINED
        dto = coordinator.get_order(order_id)
        assert dto.status == OrderStatus.PENDING
        assert dto.payment_method is None
        assert dto.items[0].quantity == 2
        assert catalog.get_by_id("P1").stock_quantity == 8
        assert "payment_declined" in logger.names("warning")

    def test_retry_after_decline(self):
        coordinator, _, _, order_id = _setup()
        gateway = RecordingGateway(approve=False)
        method = SpyPaymentMethod(gateway)

        assert not coordinator.commit_payment(order_id, method, {}).success
        gateway.approve = True
        assert coordinator.commit_payment(order_id, method, {}).success
        assert method.charge_calls == 2


class TestCommitPaymentTimeout:

    def test_timeout_is_a_failed_outcome(self):
        coordinator, _, _, order_id = _setup()
        gateway = BlockingGateway()
        try:
            outcome = coordinator.commit_payment(
                order_id, SpyPaymentMethod(gateway), {}, timeout=0.05
            )
        finally:
            gateway.release.set()

        assert not outcome.success
        assert outcome.reason == TIMED_OUT
        assert coordinator.get_order(order_id).status == OrderStatus.PENDING

    def test_default_timeout_comes_from_settings(self):
        coordinator, _, _, order_id = _setup(payment_timeout_seconds=0.05)
        gateway = BlockingGateway()
        try:
            outcome = coordinator.commit_payment(order_id, SpyPaymentMethod(gateway), {})
        finally:
            gateway.release.set()

        assert outcome.reason == TIMED_OUT

    def test_hung_charge_does_not_hold_up_other_orders(self):
        coordinator, _, _, first = _setup()
        second = coordinator.create_order("C2", "Bob").id
        coordinator.add_item(second, "P1", 1)
        hung = BlockingGateway()
        fast = RecordingGateway()
        try:
            for _ in range(3):
                stuck = coordinator.commit_payment(
                    first, SpyPaymentMethod(hung), {}, timeout=0.05
                )
                assert stuck.reason == TIMED_OUT

            outcome = coordinator.commit_payment(
                second, SpyPaymentMethod(fast), {}, timeout=2.0
            )
        finally:
            hung.release.set()

        assert outcome.success
        assert len(fast.calls) == 1
        assert coordinator.get_order(second).status == OrderStatus.PROCESSING


class TestCommitPaymentErrors:

    def test_contract_error_from_charge_propagates(self):
        coordinator, _, _, order_id = _setup()
        with pytest.raises(KeyError, match="gateway contract broken"):
            coordinator.commit_payment(order_id, ExplodingPaymentMethod(), {})
        assert coordinator.get_order(order_id).status == OrderStatus.PENDING

    def test_failed_write_after_charge_is_reported(self):
        logger = RecordingLogger()
        order_repo = FailingOrderRepository()
        coordinator, _, _, order_id = _setup(order_repo=order_repo, logger=logger)

        order_repo.fail_replace = True
        with pytest.raises(RuntimeError):
            coordinator.commit_payment(order_id, SpyPaymentMethod(), {})
        assert "payment_not_recorded" in logger.names("error")
