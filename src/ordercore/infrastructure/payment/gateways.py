"""In-process payment gateways.

These stand in for a real payment provider.  ``ApprovingGateway`` is
deterministic and meant for demos; ``SimulatedGateway`` approves each
charge with a configured probability per payment method, drawing from an
injected random generator so runs can be reproduced with a seed.
"""

from __future__ import annotations

import random
from collections.abc import Mapping

from ordercore.domain.model.value_objects import Money
from ordercore.domain.payment.base import PaymentGateway

DEFAULT_SUCCESS_RATE = 0.8


class ApprovingGateway(PaymentGateway):
    """Approves every charge with a positive amount."""

    def authorize(self, method: str, amount: Money, reference: str) -> bool:
        return amount.amount > 0


class SimulatedGateway(PaymentGateway):

    def __init__(
        self,
        success_rates: Mapping[str, float],
        rng: random.Random | None = None,
    ) -> None:
        self._success_rates = dict(success_rates)
        self._rng = rng or random.Random()

    def authorize(self, method: str, amount: Money, reference: str) -> bool:
        rate = self._success_rates.get(method, DEFAULT_SUCCESS_RATE)
        return self._rng.random() < rate
