"""Integration tests for ConsoleAdapter with real structlog.

Architecture:
- Integration tests with REAL structlog (not mocked)
- Fresh ConsoleAdapter instances per test (bypass singleton)
"""

import json
import sys
from io import StringIO
from unittest.mock import patch

import pytest

from src.infrastructure.logging.console_adapter import ConsoleAdapter


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.strip().splitlines()]


@pytest.mark.integration
class TestConsoleAdapterIntegration:
    """Integration tests for ConsoleAdapter with real structlog."""

    def test_json_mode_produces_valid_json(self):
        """Test JSON mode produces parseable JSON output."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            adapter.info("Persistent session token issued", token_prefix="abcd1234")

        (entry,) = _json_lines(captured_output.getvalue())
        assert entry["event"] == "Persistent session token issued"
        assert entry["token_prefix"] == "abcd1234"
        assert entry["level"] == "info"

    def test_error_details_included(self):
        """Test critical() adds the exception type and message."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True)
            adapter.critical("Integrity fault", error=ValueError("bad record"))

        (entry,) = _json_lines(captured_output.getvalue())
        assert entry["error_type"] == "ValueError"
        assert entry["error_message"] == "bad record"

    def test_bound_context_included(self):
        """Test bind() adds context to subsequent logs."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True).bind(component="persistent_session")
            adapter.warning("Deprecated option")

        (entry,) = _json_lines(captured_output.getvalue())
        assert entry["component"] == "persistent_session"

    def test_level_filters_debug(self):
        """Test messages below the configured level are dropped."""
        captured_output = StringIO()

        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True, level="INFO")
            adapter.debug("Persistent session cookie renewed")

        assert captured_output.getvalue() == ""
