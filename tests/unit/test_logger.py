import json
import logging

from grid_console.app.infrastructure.logging.logger import get_logger, log_action


def test_log_action_emits_json_line_without_secrets(caplog) -> None:
    logger = get_logger("grid_console.tests")

    with caplog.at_level(logging.INFO, logger="grid_console"):
        log_action(logger, "contests", "load", "success", 200, page=2, token="abc", password="x")

    record = json.loads(caplog.records[-1].getMessage())
    assert record["module"] == "contests"
    assert record["action"] == "load"
    assert record["outcome"] == "success"
    assert record["status_code"] == 200
    assert record["page"] == 2
    assert "token" not in record
    assert "password" not in record
