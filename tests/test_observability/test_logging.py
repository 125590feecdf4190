"""Tests for structured logging setup."""

import logging

import structlog

from graphkit.observability import bind_context, clear_context, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_console_renderer_in_development(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_noisy_loggers_quieted(self):
        setup_logging()
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING


class TestContext:
    """Tests for bind_context() and clear_context()."""

    def test_bind_and_clear(self):
        bind_context(request_id="req-1", command="centrality")
        assert structlog.contextvars.get_contextvars() == {
            "request_id": "req-1",
            "command": "centrality",
        }

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_get_logger(self):
        logger = get_logger("graphkit.test")
        assert hasattr(logger, "info")
