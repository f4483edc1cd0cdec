"""Unit tests for crbmnl.lite_logging."""

import logging

import pytest

from crbmnl.lite_logging import CorrelationIdFilter, configure_lite_logging, get_logging_status
from crbmnl.middleware import request_id_var

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_logger_levels(monkeypatch):
    """Keep logger levels and CRBMNL_* variables from leaking between tests."""
    monkeypatch.delenv("CRBMNL_DEBUG", raising=False)
    monkeypatch.delenv("CRBMNL_LOG_LEVEL", raising=False)
    names = ["", "crbmnl", "httpx", "httpcore", "aiohttp.access", "aiohttp.server", "aiohttp.web", "asyncio", "PIL"]
    saved = {name: logging.getLogger(name).level for name in names}
    root = logging.getLogger()
    saved_filters = {handler: list(handler.filters) for handler in root.handlers}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
    for handler, filters in saved_filters.items():
        handler.filters = filters


class TestCorrelationIdFilter:
    """Test request id injection into log records."""

    def _record(self):
        return logging.LogRecord("crbmnl.test", logging.INFO, __file__, 1, "msg", None, None)

    def test_no_request_in_context(self):
        record = self._record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.request_id == "no-request-id"

    def test_request_id_from_context(self):
        token = request_id_var.set("req-42")
        try:
            record = self._record()
            CorrelationIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-42"


class TestConfigureLiteLogging:
    """Test logger level policy."""

    def test_production_levels(self):
        configure_lite_logging(debug_mode=False)

        assert logging.getLogger("crbmnl").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("aiohttp.access").level == logging.WARNING
        assert logging.getLogger("PIL").level == logging.WARNING

    def test_debug_mode(self):
        configure_lite_logging(debug_mode=True)

        assert logging.getLogger("crbmnl").level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_env_debug_enables_debug(self, monkeypatch):
        monkeypatch.setenv("CRBMNL_DEBUG", "true")

        configure_lite_logging(debug_mode=False)

        assert logging.getLogger("crbmnl").level == logging.DEBUG

    def test_force_debug_overrides_env(self, monkeypatch):
        monkeypatch.setenv("CRBMNL_DEBUG", "1")

        configure_lite_logging(debug_mode=True, force_debug=False)

        assert logging.getLogger("crbmnl").level == logging.INFO

    def test_env_log_level_sets_root(self, monkeypatch):
        monkeypatch.setenv("CRBMNL_LOG_LEVEL", "warning")

        configure_lite_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_existing_handlers_get_correlation_filter(self):
        configure_lite_logging()

        for handler in logging.getLogger().handlers:
            assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_status_reports_levels(self):
        configure_lite_logging(debug_mode=True)

        status = get_logging_status()

        assert status["crbmnl"] == "DEBUG"
        assert status["httpx"] == "WARNING"
        assert set(status) == {"root", "crbmnl", "aiohttp.access", "httpx", "asyncio"}
