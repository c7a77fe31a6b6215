"""PayPal payments."""

from __future__ import annotations

from ordercore.domain.payment.base import PaymentDetails, PaymentMethod, has_fields

MIN_PASSWORD_LENGTH = 6


class PayPalPayment(PaymentMethod):

    def validate_details(self, details: PaymentDetails) -> bool:
        if not has_fields(details, "email", "password"):
            return False

        email = details["email"]
        if "@" not in email or "." not in email:
            return False

        return len(details["password"]) >= MIN_PASSWORD_LENGTH

    def display_name(self) -> str:
        return "PayPal"

    def masked_reference(self, details: PaymentDetails) -> str:
        email = details.get("email", "")
        local, _, domain = email.partition("@")
        return f"{local[:1]}***@{domain}" if domain else "***"
