"""Credit card payments."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime

from ordercore.domain.payment.base import (
    PaymentDetails,
    PaymentGateway,
    PaymentMethod,
    has_fields,
    is_digits,
)

REQUIRED_FIELDS = ("cardNumber", "expiryDate", "cvv", "cardHolderName")
_EXPIRY = re.compile(r"[0-9]{2}/[0-9]{2}")


class CreditCardPayment(PaymentMethod):
    """Requires a 16-digit card number, a 3-digit CVV and an ``MM/YY``
    expiry date that has not passed.

    A card stays valid through the last day of its expiry month.
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        clock: Callable[[], datetime] = datetime.now,
        logger=None,
    ) -> None:
        super().__init__(gateway, logger)
        self._clock = clock

    def validate_details(self, details: PaymentDetails) -> bool:
        if not has_fields(details, *REQUIRED_FIELDS):
            return False

        if not is_digits(details["cardNumber"], 16):
            return False
        if not is_digits(details["cvv"], 3):
            return False
        if not details["cardHolderName"].strip():
            return False

        if not _EXPIRY.fullmatch(details["expiryDate"]):
            return False
        try:
            expiry = datetime.strptime(details["expiryDate"], "%m/%y")
        except ValueError:
            return False

        now = self._clock()
        return (expiry.year, expiry.month) >= (now.year, now.month)

    def display_name(self) -> str:
        return "Credit Card"

    def masked_reference(self, details: PaymentDetails) -> str:
        return f"****-****-****-{details.get('cardNumber', '')[-4:]}"
