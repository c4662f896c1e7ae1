# === FILE: ua_scout/logger.py ===
"""Логирование UAScout: один именованный логгер, вывод в stderr и, по желанию, в файл.

stdout занят HTML-отчётом, поэтому консольный обработчик пишет в stderr::

    from ua_scout.logger import logger
    logger.info("Crawl started")
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "UAScout"
_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def init_logging(
    level: Union[int, str] = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера UAScout: stderr плюс ротируемый файл, если задан *log_file*."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in lg.handlers:
        handler.close()
    lg.handlers.clear()

    formatter = logging.Formatter(log_format)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    lg.addHandler(console)

    if log_file is not None:
        file_handler = RotatingFileHandler(
            str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        lg.addHandler(file_handler)

    lg.propagate = False
    return lg


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["logger", "init_logging", "LOGGER_NAME"]
