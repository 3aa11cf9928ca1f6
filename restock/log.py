"""
Logging setup — console plus rotating file output for the ``restock`` logger tree.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from restock.config import LOG_BACKUP_COUNT, LOG_LEVEL, LOG_MAX_BYTES, LOGS_FOLDER


def setup_logging(level: str | int = LOG_LEVEL, log_dir: Path | None = LOGS_FOLDER) -> logging.Logger:
    """Configure the package logger once. Pass ``log_dir=None`` for console only."""
    logger = logging.getLogger("restock")
    logger.setLevel(level)

    # Prevent adding handlers multiple times (reload, tests, CLI + server)
    if logger.handlers:
        return logger

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("%(levelname)s  %(message)s"))
    logger.addHandler(console)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "restock.log",
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
