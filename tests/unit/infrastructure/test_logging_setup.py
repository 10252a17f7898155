"""Tests for structlog/stdlib logging configuration."""

from __future__ import annotations

import logging

import structlog

from rokucast.infrastructure.config import AppConfig
from rokucast.infrastructure.logging.setup import (
    BASE_LOGGING_CONFIG,
    build_logging_config,
    configure_logging,
)


class TestBuildLoggingConfig:
    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig())

        processors = cfg["formatters"]["structlog"]["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert cfg["root"] == {"handlers": ["default"], "level": "INFO"}

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))

        processors = cfg["formatters"]["structlog"]["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_logs_go_to_stderr(self) -> None:
        cfg = build_logging_config(AppConfig())
        handler = cfg["handlers"]["default"]
        assert handler["stream"] == "ext://sys.stderr"
        assert handler["formatter"] == "structlog"

    def test_http_libraries_quiet_unless_debug(self) -> None:
        info = build_logging_config(AppConfig())
        debug = build_logging_config(AppConfig(log_level="DEBUG"))

        assert info["loggers"]["httpx"]["level"] == "WARNING"
        assert debug["loggers"]["httpx"]["level"] == "DEBUG"
        assert debug["loggers"]["httpcore"]["level"] == "DEBUG"

    def test_base_config_not_mutated(self) -> None:
        build_logging_config(AppConfig(log_level="DEBUG"))
        assert BASE_LOGGING_CONFIG["formatters"] == {}
        assert BASE_LOGGING_CONFIG["loggers"]["httpx"]["level"] == "WARNING"


class TestConfigureLogging:
    def test_applies_root_level(self) -> None:
        configure_logging(AppConfig(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

        configure_logging(AppConfig(log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG
