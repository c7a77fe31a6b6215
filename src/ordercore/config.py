"""Application settings.

Values come from ``ORDERCORE_*`` environment variables or a ``.env`` file.
Components receive a ``Settings`` instance explicitly; ``get_settings()``
is only called at the composition root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # Environment / logging
    env: str = Field(default="development")
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    # Storage used by the CLI between invocations
    data_dir: Path = Field(default=Path("data"))

    # Orders
    currency: str = Field(default="USD")
    max_line_items: int = Field(default=50, ge=1)

    # Payments
    payment_timeout_seconds: float = Field(default=30.0, gt=0)
    simulate_payments: bool = Field(default=True)
    # Approval probability per payment method when simulating a gateway
    success_rates: dict[str, float] = Field(
        default_factory=lambda: {
            "Credit Card": 0.80,
            "PayPal": 0.85,
            "Bank Transfer": 0.75,
            "Cryptocurrency": 0.70,
        }
    )

    model_config = SettingsConfigDict(
        env_prefix="ORDERCORE_", env_file=".env", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings for the composition root."""
    return Settings()
