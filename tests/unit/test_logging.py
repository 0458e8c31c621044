"""
Tests for log context handling.
"""

from unittest.mock import MagicMock

from scamcheck.observability import AnalysisAuditLogger, get_log_context, log_context
from scamcheck.observability.logging import add_context_to_event, add_context_to_record


class TestLogContext:
    """Test context propagation into log events."""

    def test_nested_context(self):
        """Test inner contexts extend and then restore the outer one."""
        with log_context(request_id="req-1"):
            with log_context(variant="audio") as inner:
                assert inner.request_id == "req-1"
                assert inner.variant == "audio"
            assert get_log_context().variant is None
            assert get_log_context().request_id == "req-1"

    def test_context_added_to_event(self):
        """Test bound context appears on every event."""
        with log_context(request_id="req-2", variant="text"):
            event = add_context_to_event(None, "info", {"event": "analysis_started"})

        assert event["request_id"] == "req-2"
        assert event["variant"] == "text"

    def test_context_added_to_loguru_record(self):
        """Test loguru records pick up the same context."""
        record = {"extra": {}}

        with log_context(request_id="req-3"):
            add_context_to_record(record)

        assert record["extra"]["request_id"] == "req-3"


class TestAuditLogger:
    """Test audit events."""

    def test_log_analysis(self):
        logger = MagicMock()
        AnalysisAuditLogger(logger).log_analysis("text", "Parsing Error", True, 12.3456)

        logger.info.assert_called_once_with(
            "analysis_completed",
            variant="text",
            status="Parsing Error",
            fallback=True,
            duration_ms=12.35,
        )

    def test_log_error(self):
        logger = MagicMock()
        AnalysisAuditLogger(logger).log_error("UpstreamError", "boom", "dispatcher", status_code=503)

        _, kwargs = logger.error.call_args
        assert kwargs["component"] == "dispatcher"
        assert kwargs["status_code"] == 503
