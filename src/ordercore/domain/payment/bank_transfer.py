"""Bank transfer payments."""

from __future__ import annotations

from ordercore.domain.payment.base import (
    PaymentDetails,
    PaymentMethod,
    has_fields,
    is_digits,
)


class BankTransferPayment(PaymentMethod):
    """Routing number of exactly 9 digits, account number of 8 to 17
    digits, and an account holder name of at least two characters."""

    def validate_details(self, details: PaymentDetails) -> bool:
        if not has_fields(details, "routingNumber", "accountNumber", "accountHolderName"):
            return False

        if not is_digits(details["routingNumber"], 9):
            return False
        if not is_digits(details["accountNumber"], 8, 17):
            return False

        return len(details["accountHolderName"]) >= 2

    def display_name(self) -> str:
        return "Bank Transfer"

    def masked_reference(self, details: PaymentDetails) -> str:
        return f"****{details.get('accountNumber', '')[-4:]}"
