# tests/test_logger.py

import json
import logging

from core.logger import get_logger, setup_logging


def test_json_events_carry_context(caplog):
    caplog.set_level(logging.DEBUG)
    setup_logging(json_output=True, log_level="debug")

    get_logger("tests.logger").info("report_exported", report="Lista_Alunos", format="xlsx")

    event = json.loads(caplog.records[-1].getMessage())
    assert event["event"] == "report_exported"
    assert event["report"] == "Lista_Alunos"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_events_below_level_are_dropped(caplog):
    caplog.set_level(logging.DEBUG)
    setup_logging(log_level="warning")

    get_logger("tests.logger").info("state_saved")

    assert not [r for r in caplog.records if "state_saved" in r.getMessage()]
