"""The result of a payment attempt.

A decline is an ordinary, expected answer from a payment provider, so it
is returned as a value rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordercore.domain.model.value_objects import Money

DECLINED = "declined"
TIMED_OUT = "timeout"


@dataclass(frozen=True)
class PaymentOutcome:
    order_id: str
    success: bool
    method: str
    amount: Money
    reason: str | None = None

    @staticmethod
    def approved(order_id: str, method: str, amount: Money) -> PaymentOutcome:
        return PaymentOutcome(order_id, True, method, amount)

    @staticmethod
    def failed(order_id: str, method: str, amount: Money, reason: str) -> PaymentOutcome:
        return PaymentOutcome(order_id, False, method, amount, reason)
