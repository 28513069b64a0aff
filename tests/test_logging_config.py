import logging

import pytest

from savekeep.logging_config import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_installs_single_handler(root_logger):
    configure_logging()
    configure_logging()
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO


def test_env_level_override(root_logger, monkeypatch):
    monkeypatch.setenv("SAVEKEEP_LOG_LEVEL", "debug")
    configure_logging()
    assert root_logger.level == logging.DEBUG


def test_unknown_env_level_falls_back(root_logger, monkeypatch):
    monkeypatch.setenv("SAVEKEEP_LOG_LEVEL", "chatty")
    configure_logging(logging.WARNING)
    assert root_logger.level == logging.WARNING
