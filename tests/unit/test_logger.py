"""Tests for structured logging setup and run_id propagation."""

import io
import json
import logging

from hse_kpi.observability.logger import (
    HANDLER_NAME,
    _add_run_id,
    get_run_id,
    new_run_id,
    setup_logging,
)


def _capture(level="INFO", format="json"):
    buf = io.StringIO()
    setup_logging(level=level, format=format).setStream(buf)
    return buf


class TestRunId:
    def test_get_creates_id(self):
        assert get_run_id()

    def test_new_run_id_replaces(self):
        first = new_run_id()
        rid = new_run_id()
        assert rid != first
        assert get_run_id() == rid

    def test_processor_adds_run_id(self):
        rid = new_run_id()
        event = _add_run_id(None, "info", {"event": "hello"})
        assert event["run_id"] == rid


class TestSetupLogging:
    def test_stdlib_records_rendered_as_json(self):
        buf = _capture()
        rid = new_run_id()
        logging.getLogger("hse_kpi.calendar.periods").info("week map built for %d", 2026)

        entry = json.loads(buf.getvalue().strip())
        assert entry["event"] == "week map built for 2026"
        assert entry["run_id"] == rid
        assert entry["level"] == "info"
        assert entry["logger"] == "hse_kpi.calendar.periods"
        assert "timestamp" in entry

    def test_level_filters_records(self):
        buf = _capture(level="WARNING")
        logging.getLogger("hse_kpi.test").info("hidden")
        logging.getLogger("hse_kpi.test").warning("shown")
        lines = buf.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "shown"

    def test_console_format(self):
        buf = _capture(format="console")
        rid = new_run_id()
        logging.getLogger("hse_kpi.test").info("rollup done")
        out = buf.getvalue()
        assert "rollup done" in out
        assert f"run_id={rid}" in out

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging()
        root = logging.getLogger()
        assert [h.get_name() for h in root.handlers].count(HANDLER_NAME) == 1

    def test_stdlib_logger_still_usable(self, caplog):
        setup_logging(level="INFO")
        with caplog.at_level(logging.INFO, logger="hse_kpi"):
            logging.getLogger("hse_kpi.calendar").info("week map built")
        assert "week map built" in caplog.text
