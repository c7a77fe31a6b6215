"""Lookup of payment methods by their command-line name.

Only front ends use this; the coordinator is handed a ``PaymentMethod``
instance and never branches on names.
"""

from __future__ import annotations

from ordercore.domain.exceptions import ValidationError
from ordercore.domain.payment.bank_transfer import BankTransferPayment
from ordercore.domain.payment.base import PaymentGateway, PaymentMethod
from ordercore.domain.payment.credit_card import CreditCardPayment
from ordercore.domain.payment.cryptocurrency import CryptocurrencyPayment
from ordercore.domain.payment.paypal import PayPalPayment

PAYMENT_METHODS: dict[str, type[PaymentMethod]] = {
    "credit-card": CreditCardPayment,
    "paypal": PayPalPayment,
    "bank-transfer": BankTransferPayment,
    "crypto": CryptocurrencyPayment,
}


def payment_method_for(name: str, gateway: PaymentGateway) -> PaymentMethod:
    try:
        method_cls = PAYMENT_METHODS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(PAYMENT_METHODS))
        raise ValidationError(
            f"Unknown payment method '{name}' (expected one of: {known})"
        ) from None
    return method_cls(gateway)
