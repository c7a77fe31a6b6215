import logging

import pytest
import structlog

from ordercore.logging import add_context, clear_context, configure_logging
from tests.fakes import make_settings


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    clear_context()
    root.handlers, root.level = handlers, level


def _renderer():
    return structlog.get_config()["processors"][-1]


class TestConfigureLogging:

    def test_console_in_development(self):
        configure_logging(make_settings(log_level="debug"))
        assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)
        assert logging.getLogger().level == logging.DEBUG

    def test_json_when_requested(self):
        configure_logging(make_settings(json_logs=True))
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)

    def test_json_in_production(self):
        configure_logging(make_settings(env="production"))
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)


class TestContext:

    def test_bind_and_clear(self):
        add_context(command="order")
        assert structlog.contextvars.get_contextvars() == {"command": "order"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
