"""
Tests for structured JSON logging setup.
"""

import json
import logging

from headerdb.core.logging_config import get_logger, setup_logging


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "headerdb.json"
    logger = setup_logging(
        name="headerdb.test_file",
        log_file=str(log_file),
        level="DEBUG",
        environment="test",
        enable_console=False,
    )
    logger.info("New best tip", extra={"event": "index.best_tip", "height": 7})
    for handler in logger.handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "New best tip"
    assert record["event"] == "index.best_tip"
    assert record["height"] == 7
    assert record["environment"] == "test"
    assert record["service"] == "headerdb"
    assert record["level"] == "info"
    assert record["source"]["function"] == "test_setup_logging_writes_json_file"
    assert "timestamp" in record

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_replaces_handlers():
    logger = setup_logging(name="headerdb.test_handlers", enable_console=True)
    logger = setup_logging(name="headerdb.test_handlers", enable_console=True)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    logger.handlers = []


def test_get_logger_reuses_configured_logger():
    first = get_logger("headerdb.test_reuse")
    second = get_logger("headerdb.test_reuse")
    assert first is second
    assert len(second.handlers) == 1
    second.handlers = []
