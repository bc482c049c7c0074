from __future__ import annotations

import json

import structlog

from scorecards.logging import configure_logging


def test_configure_logging_writes_json_events_to_stderr(capsys):
    configure_logging("info")

    structlog.get_logger("scorecards.test").info(
        "scorecards.result", application_id="APP-1", overall_weighted_average=4.5
    )

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip().splitlines()[-1])
    assert event["event"] == "scorecards.result"
    assert event["application_id"] == "APP-1"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_configure_logging_filters_below_level(capsys):
    configure_logging("WARNING")

    logger = structlog.get_logger("scorecards.test")
    logger.info("scorecards.result", application_id="APP-1")
    logger.warning("submissions.partial_load", errors=["line 2: invalid JSON"])

    lines = capsys.readouterr().err.strip().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["submissions.partial_load"]
