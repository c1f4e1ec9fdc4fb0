"""Tests for logging setup and ``recordsift.configure``."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

import recordsift
from recordsift import adapters
from recordsift.adapters.sqlalchemy.adapter import SQLAlchemyAdapter
from recordsift.config.settings import ObservabilitySettings, Settings
from recordsift.observability.logging import HANDLER_NAME, setup_logging


def _installed_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger("recordsift").handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    logger = logging.getLogger("recordsift")
    level = logger.level
    yield
    for handler in _installed_handlers():
        logger.removeHandler(handler)
    logger.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_defaults(self) -> None:
        setup_logging()
        assert structlog.is_configured()
        assert logging.getLogger("recordsift").level == logging.INFO

        (handler,) = _installed_handlers()
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(handler.formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_and_level(self) -> None:
        setup_logging(ObservabilitySettings(log_level="debug", log_format="console"))
        assert logging.getLogger("recordsift").level == logging.DEBUG

        (handler,) = _installed_handlers()
        assert isinstance(handler.formatter.processors[-1], structlog.dev.ConsoleRenderer)

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging()
        setup_logging()
        assert len(_installed_handlers()) == 1

    def test_renders_stdlib_records_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging()
        logging.getLogger("recordsift.core.records").warning("Deferred %s()", "order_by")
        out = capsys.readouterr().out
        assert '"event": "Deferred order_by()"' in out
        assert '"logger": "recordsift.core.records"' in out


class TestConfigure:
    def test_configure_rebuilds_registry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(adapters, "registry", adapters.registry)
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            records={"default_adapter": "sqlalchemy", "preserve_hit_order": False},
        )

        applied = recordsift.configure(settings)

        assert applied is settings
        assert isinstance(adapters.registry.default, SQLAlchemyAdapter)
        assert len(_installed_handlers()) == 1
