from __future__ import annotations

import logging
from io import StringIO

import planner_import.logging.init as log_init
from planner_import.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    out = StringIO()
    logger = setup_logging(stream=out)
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")
    assert out.getvalue().strip().split("\n") == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_child_loggers_share_handler():
    out = StringIO()
    setup_logging(stream=out)
    logging.getLogger(f"{LOGGER_NAME}.services.orchestrator").warning("teachers.csv: bad row")
    assert out.getvalue() == "WARN teachers.csv: bad row\n"


def test_debug_hidden_until_set_debug():
    out = StringIO()
    logger = setup_logging(stream=out)
    logger.debug("hidden")
    set_debug(logger)
    logger.debug("shown")
    assert out.getvalue() == "DEBUG shown\n"


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_summary_level_registered():
    setup_logging()
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"


def test_log_summary_convenience_function():
    out = StringIO()
    setup_logging(stream=out)
    log_summary("files=2/2 success=2 failed=0 rows=150")
    assert out.getvalue() == "SUMMARY files=2/2 success=2 failed=0 rows=150\n"


def test_reset_logging_detaches_handlers():
    logger = setup_logging()
    reset_logging()
    assert log_init._logger is None
    assert logger.handlers == []
    assert logger.propagate is True
