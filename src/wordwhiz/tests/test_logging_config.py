"""Tests for logging configuration."""
import logging

import pytest

from wordwhiz.logging_config import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger after the test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging(root_logger):
    setup_logging("Starting tests", level="warning")

    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_with_directory(root_logger, tmp_path, monkeypatch):
    from wordwhiz.config import settings

    monkeypatch.setattr(settings.logging, "dir", str(tmp_path / "logs"))
    setup_logging(level=logging.INFO)

    assert len(root_logger.handlers) == 2
    assert (tmp_path / "logs" / "wordwhiz.log").exists()
