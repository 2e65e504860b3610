"""Logging for **PolicyScout**.

Every module logs through a child of the ``PolicyScout`` logger, named after
the component it belongs to::

      from policy_scout.logger import get_logger
      logger = get_logger("crawler")      # -> "PolicyScout.crawler"
      logger.info("Crawling (#%d): %s", n, url)

Children carry no handlers of their own; records bubble up to the project
logger, which writes to stdout and, when ``--log-file`` is given, to a
rotating UTF-8 file. The CLI calls :func:`init_logging` once per invocation;
the engine and site-list helpers use the project logger :data:`logger` directly.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterator, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "PolicyScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _handlers(log_file: str | Path | None, fmt: str) -> Iterator[logging.Handler]:
    formatter = logging.Formatter(fmt)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    yield console
    if log_file is not None:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            filename=str(Path(log_file).expanduser()),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        rotating.setFormatter(formatter)
        yield rotating


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the ``PolicyScout`` logger and, through it, every component logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``); applies to all
        component loggers, which keep level ``NOTSET``.
    log_file
        Rotating logfile. *None* → stdout only.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – close and drop existing handlers first; *False* – append.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    for handler in _handlers(log_file, log_format):
        lg.addHandler(handler)

    # component records stop at the project logger
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Entry point used by the CLI; always replaces the previous handlers."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


def get_logger(component: str) -> logging.Logger:
    """Component logger, e.g. ``get_logger("locator")`` -> ``PolicyScout.locator``."""
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "DEFAULT_FORMAT", "LOGGER_NAME"]
