from pathlib import Path

import pytest
from pydantic import ValidationError

from ordercore.config import Settings
from tests.fakes import make_settings


class TestSettings:

    def test_defaults(self):
        settings = make_settings()
        assert settings.max_line_items == 50
        assert settings.currency == "USD"
        assert settings.success_rates["PayPal"] == 0.85

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ORDERCORE_MAX_LINE_ITEMS", "5")
        monkeypatch.setenv("ORDERCORE_DATA_DIR", "/tmp/ordercore")
        monkeypatch.setenv("ORDERCORE_SIMULATE_PAYMENTS", "false")

        settings = Settings(_env_file=None)

        assert settings.max_line_items == 5
        assert settings.data_dir == Path("/tmp/ordercore")
        assert settings.simulate_payments is False

    def test_unprefixed_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("MAX_LINE_ITEMS", "5")
        assert Settings(_env_file=None).max_line_items == 50

    @pytest.mark.parametrize(
        "overrides",
        [{"max_line_items": 0}, {"payment_timeout_seconds": 0}],
    )
    def test_rejects_out_of_range(self, overrides):
        with pytest.raises(ValidationError):
            make_settings(**overrides)
