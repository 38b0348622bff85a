"""Logging configuration for the application."""

import logging
import sys

from vendorhub.core.config import get_settings

# Chatty third-party loggers kept at WARNING unless debug is on.
_QUIET_LOGGERS = ("sqlalchemy.engine", "redis", "aiosqlite", "asyncio")


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is LOG_LEVEL when set, otherwise DEBUG when settings.debug is True
    and INFO when it is not. Output goes to stdout.
    """
    settings = get_settings()
    if settings.log_level:
        log_level = logging.getLevelName(settings.log_level.upper())
    else:
        log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.debug:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
