import logging
import pytest
from rich.logging import RichHandler

from webclient.config import get_settings
from webclient.log import get_logger, setup_logging

@pytest.fixture
def clean_settings(monkeypatch):
    get_settings.cache_clear()
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield monkeypatch
    get_settings.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)

def test_log_level_from_environment(clean_settings):
    """
    WHY: Applications tune log verbosity without code changes.
    HOW: Set WEBCLIENT_LOG_LEVEL and run setup_logging().
    EXPECTED: Root logger at that level with a Rich handler; httpx quieted to WARNING.
    """
    clean_settings.setenv("WEBCLIENT_LOG_LEVEL", "DEBUG")

    setup_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in root.handlers)
    assert logging.getLogger("httpx").level == logging.WARNING

def test_default_settings(clean_settings):
    clean_settings.delenv("WEBCLIENT_LOG_LEVEL", raising=False)
    assert get_settings().LOG_LEVEL == "INFO"

def test_loggers_are_namespaced():
    assert get_logger("client").name == "webclient.client"
