"""
Logging configuration for the ghost-mcp server.

Writes rotating logs to <log dir>/ghost_mcp.log and mirrors warnings to stderr.
Never logs to stdout: the stdio MCP transport owns it.
"""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "ghost_mcp"
LOG_FILE_NAME = "ghost_mcp.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _setup_file_logger(name: str, log_file: Path | None, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    if log_file is not None:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)
        console_handler.setLevel(logging.WARNING)
    else:
        # stderr is the only sink left
        console_handler.setLevel(level)

    logger.addHandler(console_handler)
    logger.propagate = False
    return logger


def setup_logging(log_dir: str | os.PathLike | None = None, level: str | None = None) -> Path | None:
    """
    Configure logging for the ghost-mcp server.

    Returns the path of the log file in use, or None when the log directory
    cannot be created and logging falls back to stderr only.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved_level = getattr(logging, log_level, logging.INFO)

    directory = Path(log_dir or os.getenv("GHOST_MCP_LOG_DIR", "logs"))
    log_file: Path | None = directory / LOG_FILE_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
        _setup_file_logger(ROOT_LOGGER_NAME, log_file, resolved_level)
    except OSError as e:
        log_file = None
        _setup_file_logger(ROOT_LOGGER_NAME, None, resolved_level)
        logging.getLogger(ROOT_LOGGER_NAME).warning(
            "Cannot write logs under %s (%s); logging to stderr only", directory, e
        )
    return log_file


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
