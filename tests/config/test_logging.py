"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from refdocs.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    refdocs_logger = logging.getLogger("refdocs")
    refdocs_level = refdocs_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    refdocs_logger.setLevel(refdocs_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("refdocs").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("refdocs").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("refdocs.infrastructure.indices")
        log.warning("code_docs_map_load_failed", path="/tmp/x.json", error="boom")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "code_docs_map_load_failed"
        assert parsed["path"] == "/tmp/x.json"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "refdocs.infrastructure.indices"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("refdocs.services.docs").debug("Skipping %s", "a.md")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Skipping a.md"
        assert parsed["level"] == "debug"

    def test_nothing_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("refdocs.test").warning("stderr only")
        assert capfd.readouterr().out == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("httpx").debug("request noise")
        logging.getLogger("mcp").info("protocol noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_source_bound_on_every_record(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True, source="remote")

        structlog.get_logger("refdocs.infrastructure.retriever").info("fetching")
        logging.getLogger("refdocs.services.docs").info("stdlib record")

        lines = capfd.readouterr().err.strip().splitlines()
        assert [json.loads(line)["docs_source"] for line in lines] == ["remote", "remote"]

    def test_reconfiguring_drops_previous_source(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True, source="remote")
        configure_logging(log_json=True)

        structlog.get_logger("refdocs.test").warning("after")

        assert "docs_source" not in json.loads(capfd.readouterr().err.strip())

    def test_uvicorn_access_log_is_quiet(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
