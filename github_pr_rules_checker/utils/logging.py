"""Logging setup shared by the CLI, the API and the rule checks."""

import logging
import sys

from ..config import get_settings


def setup_logging(name: str | None = None, level: str | None = None, format_string: str | None = None) -> logging.Logger:
    """Configure a stdout logger.

    Args:
    ----
        name: Logger name, this module's name when omitted
        level: Log level, the configured ``log_level`` when omitted
        format_string: Record format, the configured ``log_format`` when omitted

    Returns:
    -------
        The configured logger

    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logger = logging.getLogger(name or __name__)
    logger.setLevel(log_level)

    # Repeated calls replace the handler
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string or settings.log_format))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    return setup_logging(name)


class LoggerMixin:
    """Gives a class a ``logger`` named after it."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f"github_pr_rules_checker.{self.__class__.__name__}")
