"""Unit tests for logging configuration."""
import json
import logging

from taskmanager.config import Settings
from taskmanager.core.logging import JsonFormatter, setup_logging


def test_json_formatter():
    record = logging.LogRecord(
        name="taskmanager.core.auth",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Login failed for %s",
        args=("someone@example.com",),
        exc_info=None,
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["name"] == "taskmanager.core.auth"
    assert payload["message"] == "Login failed for someone@example.com"
    assert payload["timestamp"].endswith("+00:00")
    assert "exception" not in payload


def test_setup_logging_production_uses_json():
    """Production logs are emitted as JSON."""
    settings = Settings(
        secret_key="test-secret-key-minimum-32-characters-long",
        environment="production",
    )
    setup_logging(settings)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_setup_logging_debug_level():
    settings = Settings(
        secret_key="test-secret-key-minimum-32-characters-long",
        debug=True,
    )
    setup_logging(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert not isinstance(root_logger.handlers[0].formatter, JsonFormatter)
