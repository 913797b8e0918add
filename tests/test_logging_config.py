import logging
import logging.handlers

import pytest

from meshgrad.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.handlers[:], logger.level)
    logger.handlers = []
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers, logger.level = saved


def test_console_only_by_default():
    logger = setup_logging()
    assert logger.name == "meshgrad"
    assert logger.level == logging.DEBUG
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
    assert logger.handlers[0].level == logging.INFO


def test_file_handler_receives_debug(tmp_path):
    log_file = tmp_path / "meshgrad.log"
    logger = setup_logging(log_file=str(log_file), quiet=True)
    assert len(logger.handlers) == 1

    logging.getLogger("meshgrad.gradient").debug("assembled %d triplets", 12)
    logger.handlers[0].flush()
    assert "assembled 12 triplets" in log_file.read_text()


def test_repeated_calls_do_not_stack_handlers(tmp_path):
    setup_logging(log_file=str(tmp_path / "a.log"))
    logger = setup_logging(log_file=str(tmp_path / "a.log"))
    assert len(logger.handlers) == 2


def test_quiet_strips_console_but_keeps_file(tmp_path):
    setup_logging(log_file=str(tmp_path / "a.log"))
    logger = setup_logging(quiet=True)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.handlers.RotatingFileHandler)
