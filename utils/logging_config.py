"""Process-wide logging setup shared by the MCP server and the assistant.

Both entry points log to stderr only: for the MCP server stdout carries the
JSON-RPC stream, and for the assistant stdout is reserved for the conversation.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers that drown out tool activity at DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "mcp.server.lowlevel")


def configure_logging(
    log_file_name: str,
    *,
    level: str | None = None,
    log_dir: Path | None = None,
    log_to_file: bool | None = None,
) -> logging.Logger:
    """Configure the root logger and return it.

    Args:
        log_file_name: File name used inside the log directory (e.g. ``mcp_server.log``).
        level: Log level name; defaults to ``config.LOG_LEVEL``.
        log_dir: Directory for the rotating log file; defaults to ``config.LOG_DIR``.
        log_to_file: Whether to attach the file handler; defaults to ``config.LOG_TO_FILE``.
    """
    import config

    level_name = (level or config.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    unknown_level = not isinstance(numeric_level, int)
    if unknown_level:
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    formatter = logging.Formatter(LOG_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(numeric_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    if log_to_file is None:
        log_to_file = config.LOG_TO_FILE

    if log_to_file:
        target_dir = Path(log_dir or config.LOG_DIR)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                target_dir / log_file_name,
                when="midnight",
                backupCount=config.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as exc:
            root_logger.warning("File logging disabled, could not open %s: %s", target_dir / log_file_name, exc)
        else:
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    if numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    if unknown_level:
        root_logger.warning("Unknown LOG_LEVEL %r, falling back to INFO", level_name)

    return root_logger
