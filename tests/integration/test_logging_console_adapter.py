"""Integration tests for ConsoleAdapter with real structlog.

Tests cover:
- JSON output with structured context
- Level filtering
- Exception details on error events
- Context binding (adapter.bind and structlog contextvars)

Architecture:
- Integration tests with REAL structlog (not mocked)
- Fresh ConsoleAdapter instances per test (bypass singleton)
"""

import json
import sys
from io import StringIO
from unittest.mock import patch

import pytest
import structlog

from identity_service.infrastructure.logging import ConsoleAdapter


def capture(log_calls) -> list[dict]:
    """Run log_calls(adapter) against a fresh JSON adapter and parse the output."""
    captured_output = StringIO()
    with patch.object(sys, "stdout", captured_output):
        adapter = ConsoleAdapter(use_json=True, level="DEBUG")
        log_calls(adapter)
    return [json.loads(line) for line in captured_output.getvalue().splitlines() if line]


@pytest.mark.integration
class TestConsoleAdapterIntegration:
    def test_json_mode_produces_structured_events(self):
        events = capture(lambda log: log.info("account_registered", account_id="abc"))

        assert len(events) == 1
        assert events[0]["event"] == "account_registered"
        assert events[0]["account_id"] == "abc"
        assert events[0]["level"] == "info"
        assert "timestamp" in events[0]

    def test_level_filtering(self):
        captured_output = StringIO()
        with patch.object(sys, "stdout", captured_output):
            adapter = ConsoleAdapter(use_json=True, level="WARNING")
            adapter.info("hidden")
            adapter.warning("shown")

        output = captured_output.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_error_includes_exception_details(self):
        events = capture(
            lambda log: log.error("identity_operation_failed", error=ValueError("boom"))
        )

        assert events[0]["error_type"] == "ValueError"
        assert events[0]["error_message"] == "boom"
        assert events[0]["level"] == "error"

    def test_bind_adds_context(self):
        events = capture(lambda log: log.bind(operation="login").info("login_failed"))

        assert events[0]["operation"] == "login"

    def test_contextvars_are_merged(self):
        structlog.contextvars.bind_contextvars(trace_id="trace-123")
        try:
            events = capture(lambda log: log.info("session_issued"))
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")

        assert events[0]["trace_id"] == "trace-123"
