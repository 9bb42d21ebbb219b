"""Logging setup aligned with the Uvicorn default format."""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from dateplanner.core.logger import DATE_FORMAT, LOG_FORMAT, PACKAGE_LOGGER, resolve_log_level


def build_logging_config(level: str | None = None) -> dict[str, Any]:
    """Build a dictConfig payload: Uvicorn's loggers plus the planner's stdout handler.

    The ``dateplanner`` logger owns its handler and does not propagate, so
    engine lines are written once in the engine format while uvicorn keeps
    its own.
    """
    log_level = resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["root"] = {"handlers": ["default"], "level": log_level}

    config["loggers"]["uvicorn"]["level"] = log_level
    config["loggers"]["uvicorn.error"]["level"] = log_level
    config["loggers"]["uvicorn.access"]["level"] = log_level

    config["formatters"][PACKAGE_LOGGER] = {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}
    config["handlers"][PACKAGE_LOGGER] = {
        "formatter": PACKAGE_LOGGER,
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
    }
    config["loggers"][PACKAGE_LOGGER] = {
        "handlers": [PACKAGE_LOGGER],
        "level": log_level,
        "propagate": False,
    }

    return config


def configure_logging(level: str | None = None) -> None:
    """Apply the logging configuration through dictConfig."""
    logging.config.dictConfig(build_logging_config(level))
