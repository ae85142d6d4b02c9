"""Settings and logging setup."""

import logging

from agree_disagree_api.app.core.config import Settings
from agree_disagree_api.app.core.logging_config import PACKAGE_LOGGER, setup_logging


def test_default_clients_from_env(monkeypatch):
    monkeypatch.setenv("DEFAULT_CLIENTS", " demo, ,staging ")
    assert Settings().default_clients == ["demo", "staging"]


def test_default_clients_empty(monkeypatch):
    monkeypatch.delenv("DEFAULT_CLIENTS", raising=False)
    assert Settings().default_clients == []


def test_setup_logging_sets_package_level():
    logger = logging.getLogger(PACKAGE_LOGGER)
    previous = logger.level
    try:
        setup_logging("debug")
        assert logger.level == logging.DEBUG
        setup_logging("nonsense")
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(previous)
