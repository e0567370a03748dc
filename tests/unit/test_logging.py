import logging

from cqrepo.core._logging import get_logger


def test_get_logger_adds_single_handler() -> None:
    logger = get_logger("cqrepo.test-logger")
    again = get_logger("cqrepo.test-logger")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
