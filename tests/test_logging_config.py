import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from utils.logging_config import LOG_FORMAT, configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_adds_stderr_and_rotating_file(tmp_path, restore_root_logger):
    root = configure_logging("mcp_server.log", level="debug", log_dir=tmp_path, log_to_file=True)

    assert root.level == logging.DEBUG
    file_handlers = [handler for handler in root.handlers if isinstance(handler, TimedRotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].backupCount == 7
    assert file_handlers[0].formatter._fmt == LOG_FORMAT
    assert (tmp_path / "mcp_server.log").exists()


def test_configure_logging_without_file(tmp_path, restore_root_logger):
    root = configure_logging("assistant.log", level="WARNING", log_dir=tmp_path, log_to_file=False)

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert not (tmp_path / "assistant.log").exists()
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_root_logger):
    root = configure_logging("assistant.log", level="chatty", log_to_file=False)

    assert root.level == logging.INFO
