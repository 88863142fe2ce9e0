"""Test logging setup."""

import json
import logging

import pytest
import structlog

from buildmatrix.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root logger state after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_setup_logging_sets_level():
    setup_logging(log_level_name="INFO")
    assert logging.getLogger().level == logging.INFO
    assert len(logging.getLogger().handlers) == 1


def test_unknown_level_falls_back_to_warning():
    setup_logging(log_level_name="chatty")
    assert logging.getLogger().level == logging.WARNING


def test_log_file_receives_json(tmp_path):
    log_file = tmp_path / "logs" / "buildmatrix.log"
    setup_logging(log_level_name="DEBUG", log_file=log_file)

    get_logger("buildmatrix.test").info("matrix_resolved", properties=3)
    logging.getLogger("buildmatrix.stdlib").warning("plain %s message", "stdlib")
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert records[0]["event"] == "matrix_resolved"
    assert records[0]["properties"] == 3
    assert records[1]["event"] == "plain stdlib message"


def test_positional_arguments_formatted(tmp_path):
    log_file = tmp_path / "buildmatrix.log"
    setup_logging(log_level_name="DEBUG", log_file=log_file)

    get_logger("buildmatrix.test").debug("Parsed '%s'", "x64")
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text().splitlines()[0])
    assert record["event"] == "Parsed 'x64'"
