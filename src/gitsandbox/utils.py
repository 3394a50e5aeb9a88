"""Utility functions for gitsandbox."""

import logging

from .constants import REPORT_LOGGER_NAME


def setup_logger(name: str, verbose: bool = False) -> logging.Logger:
    """Set up and return a configured logger instance.

    Args:
        name: Logger name.
        verbose: If True, sets log level to DEBUG.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name)
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s: %(message)s')

    if not logger.handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def setup_report_logger() -> logging.Logger:
    """Return the logger that carries per-test report lines.

    It gets no handler of its own: records propagate to the root logger,
    where pytest collects them into the test report.
    """
    logger = logging.getLogger(REPORT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    return logger
