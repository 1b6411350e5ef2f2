"""
Basic tests for the logging functionality.
Tests core features without over-testing structlog or Python's logging module.
"""

import json
import tempfile
from pathlib import Path

import pytest

from genutil_pkg.logger import (
    Colors,
    GenutilLogger,
    add_log_level_colors,
    format_file_context,
    get_logger,
    setup_logging,
)


class TestLogger:
    """Test suite for GenutilLogger."""

    @pytest.fixture(autouse=True)
    def reset_logger(self):
        """Reset logger state around each test."""
        get_logger().reset()
        yield
        get_logger().reset()

    def test_logger_singleton(self):
        """Test that logger follows singleton pattern."""
        assert get_logger() is get_logger()
        assert GenutilLogger() is get_logger()

    def test_silent_before_setup(self, capsys):
        """Test that nothing is printed before setup()."""
        get_logger().info("should not appear")
        get_logger().critical("nor this")
        assert capsys.readouterr().out == ""

    def test_console_output_after_setup(self, capsys):
        """Test that setup() enables console output."""
        setup_logging("INFO")
        get_logger().info("visible message", component="resolver")
        assert "visible message" in capsys.readouterr().out

    def test_console_level_filters(self, capsys):
        """Test that messages below the console level are dropped."""
        setup_logging("WARNING")
        get_logger().info("hidden info")
        get_logger().warning("shown warning")
        out = capsys.readouterr().out
        assert "hidden info" not in out
        assert "shown warning" in out

    def test_reconfigure_level(self, capsys):
        """Test lowering the console level after setup."""
        logger = setup_logging("WARNING")
        logger.reconfigure_level("DEBUG")
        logger.debug("now visible")
        assert "now visible" in capsys.readouterr().out

    def test_setup_logging_creates_log_file(self):
        """Test that setup_logging writes JSON lines to the log file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "logs" / "genutil.log"

            logger = setup_logging(log_file=log_file)
            logger.debug("Test message", component="reader", file_context="prices.csv")

            assert log_file.exists()
            records = [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]
            messages = [r["event"] for r in records]
            assert "Test message" in messages
            record = records[messages.index("Test message")]
            assert record["component"] == "reader"
            assert record["file_context"] == "prices.csv"
            assert logger.log_file == log_file

    def test_reset_silences_logger(self, capsys):
        """Test that reset() returns to the silent state."""
        logger = setup_logging("INFO")
        logger.reset()
        logger.info("gone")
        assert logger.logger is None
        assert capsys.readouterr().out == ""


class TestProcessors:
    """Tests for the console processors."""

    def test_level_colors(self):
        """Test that known levels are colored."""
        event = add_log_level_colors(None, "error", {})
        assert event["level"] == f"{Colors.RED}ERROR{Colors.RESET}"

    def test_unknown_level_uncolored(self):
        """Test that unknown levels are upper-cased only."""
        assert add_log_level_colors(None, "trace", {})["level"] == "TRACE"

    def test_file_context_prefix(self):
        """Test the [component file] prefix."""
        event = format_file_context(None, "info", {"component": "writer", "file_context": "out.csv"})
        assert "writer" in event["context"]
        assert "out.csv" in event["context"]

    def test_long_file_context_shortened(self):
        """Test that long paths keep only their tail."""
        path = "/very/long/directory/name/that/keeps/going/prices.csv.gz"
        event = format_file_context(None, "info", {"file_context": path})
        assert "..." in event["context"]
        assert "prices.csv.gz" in event["context"]
        assert "/very/long" not in event["context"]

    def test_no_context(self):
        """Test that events without context are unchanged."""
        assert "context" not in format_file_context(None, "info", {"event": "x"})
