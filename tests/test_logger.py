"""Tests for logging helpers."""

import pytest
import structlog
from structlog.testing import capture_logs

from restaurant_api.logger import async_log_timing, log_exception, log_external_api


@pytest.mark.asyncio
async def test_async_log_timing_reports_duration():
    with capture_logs() as logs:
        log = structlog.get_logger("timing-test")
        async with async_log_timing("assemble_report", logger=log, period="daily") as ctx:
            ctx["rows"] = 3

    [entry] = logs
    assert entry["event"] == "assemble_report completed"
    assert entry["period"] == "daily"
    assert entry["rows"] == 3
    assert entry["duration_ms"] >= 0


def test_log_exception_includes_error_details():
    with capture_logs() as logs:
        log = structlog.get_logger("exception-test")
        try:
            raise RuntimeError("smtp down")
        except RuntimeError as exc:
            log_exception(log, exc, "Scheduled report failed", period="daily")

    [entry] = logs
    assert entry["event"] == "Scheduled report failed"
    assert entry["log_level"] == "error"
    assert entry["error"] == "smtp down"
    assert entry["error_type"] == "RuntimeError"
    assert entry["period"] == "daily"


def test_log_external_api_logs_failures_and_reraises():
    with capture_logs() as logs:
        log = structlog.get_logger("external-test")

        @log_external_api("smtp", logger=log)
        def deliver():
            raise ConnectionRefusedError("refused")

        with pytest.raises(ConnectionRefusedError):
            deliver()

    [entry] = logs
    assert entry["service"] == "smtp"
    assert entry["success"] is False
    assert entry["error_type"] == "ConnectionRefusedError"
