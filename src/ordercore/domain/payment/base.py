"""Payment method strategy and the gateway port it charges through.

Each concrete ``PaymentMethod`` knows the shape of its own details
(card number, wallet address, ...) and how to mask them for logs.  The
actual accept/decline decision belongs to a ``PaymentGateway`` injected at
construction, so the same strategy runs against a real provider, a
simulator, or a test double.

Adding a payment method means adding a subclass here; the coordinator
only ever talks to the abstract interface.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping

import structlog

from ordercore.domain.model.value_objects import Money

PaymentDetails = Mapping[str, str]


class PaymentGateway(ABC):
    """Port to whatever system ultimately approves or declines a charge."""

    @abstractmethod
    def authorize(self, method: str, amount: Money, reference: str) -> bool:
        """Return True if the charge went through, False if declined."""


class PaymentMethod(ABC):

    def __init__(self, gateway: PaymentGateway, logger=None) -> None:
        self._gateway = gateway
        self._log = logger or structlog.get_logger(__name__)

    @abstractmethod
    def validate_details(self, details: PaymentDetails) -> bool:
        """Check that all required fields are present and well-formed.

        Must be free of side effects.
        """

    @abstractmethod
    def display_name(self) -> str:
        """Stable human-readable label stored on paid orders."""

    @abstractmethod
    def masked_reference(self, details: PaymentDetails) -> str:
        """A loggable identifier for the payer with sensitive parts hidden."""

    def charge(self, amount: Money, details: PaymentDetails) -> bool:
        """Attempt the charge.  A decline is reported as False, not raised."""
        reference = self.masked_reference(details)
        log = self._log.bind(method=self.display_name(), reference=reference)
        log.info("charge_attempted", amount=str(amount))

        approved = self._gateway.authorize(self.display_name(), amount, reference)
        if approved:
            log.info("charge_approved", amount=str(amount))
        else:
            log.warning("charge_declined", amount=str(amount))
        return approved

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# --- Shared field helpers -----------------------------------------------------


def has_fields(details: PaymentDetails, *names: str) -> bool:
    """True if every named field is present and is a string."""
    return all(isinstance(details.get(name), str) for name in names)


def is_digits(value: str, min_len: int, max_len: int | None = None) -> bool:
    """ASCII digits only, with a length in ``[min_len, max_len]``."""
    max_len = min_len if max_len is None else max_len
    return re.fullmatch(rf"[0-9]{{{min_len},{max_len}}}", value) is not None
