"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from identdoc.config.models import LoggingConfig, LogOutputConfig
from identdoc.core.logging import LOGGER_NAME, configure_logging, get_request_id, lookup_scope


class TestLookupScope:
    """Request ID correlation for one lookup."""

    def test_given_explicit_id_when_in_scope_then_id_active(self) -> None:
        # Given / When
        with lookup_scope("lookup-123") as rid:
            # Then
            assert rid == "lookup-123"
            assert get_request_id() == "lookup-123"

    def test_given_no_id_when_in_scope_then_generates_short_id(self) -> None:
        with lookup_scope() as rid:
            assert len(rid) == 12  # uuid4().hex[:12]
            assert get_request_id() == rid

    def test_given_scope_when_exited_then_id_cleared(self) -> None:
        # Given
        with lookup_scope("outer"):
            pass

        # Then
        assert get_request_id() is None

    def test_given_nested_scopes_when_inner_exits_then_outer_restored(self) -> None:
        # Given
        with lookup_scope("outer"):
            # When
            with lookup_scope("inner"):
                assert get_request_id() == "inner"

            # Then
            assert get_request_id() == "outer"

    def test_given_error_in_scope_when_raised_then_id_cleared(self) -> None:
        # When
        with pytest.raises(RuntimeError), lookup_scope("failing"):
            raise RuntimeError("boom")

        # Then
        assert get_request_id() is None


class TestConfigureLogging:
    """Handler and level wiring."""

    def setup_method(self) -> None:
        structlog.reset_defaults()

    def teardown_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger(LOGGER_NAME).handlers.clear()

    @staticmethod
    def _json_output(path: Path, level: str | None = None) -> LogOutputConfig:
        return LogOutputConfig(format="json", destination=str(path), level=level)

    def test_given_json_stderr_when_log_then_valid_json_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # Given
        configure_logging(LoggingConfig(outputs=[LogOutputConfig(format="json")]))

        # When
        structlog.get_logger("identdoc.doc.ops").info("doc.lookup", ref="main.go:#10")

        # Then
        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        data = json.loads(lines[-1])
        assert data["event"] == "doc.lookup"
        assert data["ref"] == "main.go:#10"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_given_no_config_when_configure_then_single_stderr_handler(self) -> None:
        # When
        configure_logging()

        # Then
        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_given_repeated_configure_when_called_then_handlers_replaced(
        self, tmp_path: Path
    ) -> None:
        # Given
        config = LoggingConfig(outputs=[self._json_output(tmp_path / "a.log")])
        configure_logging(config)

        # When
        configure_logging(config)

        # Then
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_given_configure_when_called_then_root_logger_untouched(self) -> None:
        # Given
        root = logging.getLogger()
        before = list(root.handlers)

        # When
        configure_logging()

        # Then
        assert root.handlers == before
        assert logging.getLogger(LOGGER_NAME).propagate is False

    def test_given_error_level_when_info_logged_then_dropped(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "quiet.log"
        configure_logging(LoggingConfig(level="ERROR", outputs=[self._json_output(log_file)]))
        logger = structlog.get_logger("identdoc.doc.ops")

        # When
        logger.info("doc.lookup")
        logger.error("doc.failed")

        # Then
        content = log_file.read_text()
        assert "doc.lookup" not in content
        assert "doc.failed" in content

    def test_given_scope_when_log_then_request_id_attached(self, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "rid.log"
        configure_logging(LoggingConfig(outputs=[self._json_output(log_file)]))

        # When
        with lookup_scope("abc123"):
            structlog.get_logger("identdoc.doc").info("doc.found")

        # Then
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["request_id"] == "abc123"
        assert record["event"] == "doc.found"

    def test_given_multi_output_config_when_log_then_each_output_filters(
        self, tmp_path: Path
    ) -> None:
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        configure_logging(
            LoggingConfig(
                level="DEBUG",
                outputs=[self._json_output(info_file, "INFO"), self._json_output(debug_file)],
            )
        )
        logger = structlog.get_logger("identdoc.semantic.program")

        # When
        logger.debug("program.file_skipped")
        logger.info("program.loaded")

        # Then - the INFO output drops debug events
        info_content = info_file.read_text()
        assert "program.loaded" in info_content
        assert "program.file_skipped" not in info_content

        # Then - the other output inherits DEBUG
        debug_content = debug_file.read_text()
        assert "program.file_skipped" in debug_content
        assert "program.loaded" in debug_content
