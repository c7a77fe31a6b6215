"""Cryptocurrency payments."""

from __future__ import annotations

from ordercore.domain.payment.base import PaymentDetails, PaymentMethod, has_fields

SUPPORTED_CRYPTO_TYPES = frozenset({"bitcoin", "ethereum", "litecoin", "dogecoin"})

MIN_WALLET_LENGTH = 26
MAX_WALLET_LENGTH = 62


class CryptocurrencyPayment(PaymentMethod):

    def validate_details(self, details: PaymentDetails) -> bool:
        if not has_fields(details, "walletAddress", "cryptoType"):
            return False

        wallet = details["walletAddress"]
        if not MIN_WALLET_LENGTH <= len(wallet) <= MAX_WALLET_LENGTH:
            return False

        return details["cryptoType"].lower() in SUPPORTED_CRYPTO_TYPES

    def display_name(self) -> str:
        return "Cryptocurrency"

    def masked_reference(self, details: PaymentDetails) -> str:
        wallet = details.get("walletAddress", "")
        return f"{details.get('cryptoType', '?')}:{wallet[:6]}...{wallet[-6:]}"
