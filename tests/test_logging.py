"""Logging configuration tests."""

from __future__ import annotations

import logging

import pytest

from dateplanner.core.logger import PACKAGE_LOGGER, get_logger, resolve_log_level
from dateplanner.core.logging_config import build_logging_config, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_resolve_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert resolve_log_level() == "DEBUG"
    assert resolve_log_level("warning") == "WARNING"

    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert resolve_log_level() == "INFO"


def test_build_logging_config_owns_package_logger() -> None:
    config = build_logging_config("debug")

    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn.access"]["level"] == "DEBUG"
    assert config["loggers"][PACKAGE_LOGGER] == {
        "handlers": [PACKAGE_LOGGER],
        "level": "DEBUG",
        "propagate": False,
    }
    assert config["handlers"][PACKAGE_LOGGER]["stream"] == "ext://sys.stdout"


def test_unknown_level_falls_back_to_info() -> None:
    assert build_logging_config("loud")["loggers"][PACKAGE_LOGGER]["level"] == "INFO"


def test_module_loggers_share_one_handler(package_logger) -> None:
    configure_logging("info")

    first = get_logger("dateplanner.services.plan_service")
    get_logger("dateplanner.api.planner")

    assert first.handlers == []
    assert first.propagate is True
    assert len(package_logger.handlers) == 1
    assert package_logger.propagate is False


def test_get_logger_installs_handler_without_dict_config(package_logger) -> None:
    package_logger.handlers.clear()

    get_logger("dateplanner.core.scoring")
    get_logger("dateplanner.core.filters")

    assert len(package_logger.handlers) == 1
