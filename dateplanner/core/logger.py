"""Standardized logger module.

Every module in the planner logs through :func:`get_logger`. Module loggers
carry no handlers of their own: they propagate to the ``dateplanner`` package
logger, which owns the single stdout handler. ``configure_logging`` installs
that handler through dictConfig at app start; outside the app (pytest,
scripts) :func:`get_logger` installs an equivalent one on first use.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "dateplanner"
LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level: str | None = None) -> str:
    """Level name from the argument or ``LOG_LEVEL``; unknown names become INFO."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return "INFO"
    return name


def _ensure_package_handler() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        level = resolve_log_level()
        package_logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a standardized logger.

    Args:
        name: Logger name (normally ``__name__``).

    Returns:
        Logger that writes through the package handler.
    """
    _ensure_package_handler()
    return logging.getLogger(name)


def format_fields(**fields: object) -> str:
    """Render keyword fields as a ``key=value`` log suffix, keeping call order."""
    return " ".join(f"{key}={value}" for key, value in fields.items())
