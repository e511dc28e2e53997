# site_research/logger.py
"""Logging setup for SiteResearch.

Library modules log through the ``SiteResearch`` logger and never add
handlers themselves. Entry points (the CLI and ``serve``) call
:func:`init_logging` once. Records go to stderr so the JSON that
``site-research scrape`` prints on stdout stays machine-readable, and
optionally to a size-rotated file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterator, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteResearch"

#: rotation of the optional log file
MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUPS: Final[int] = 3

LevelT = Union[int, str]


def _handlers(log_file: str | Path | None) -> Iterator[logging.Handler]:
    yield logging.StreamHandler(sys.stderr)
    if log_file is not None:
        yield RotatingFileHandler(
            filename=str(log_file),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )


def configure(
    *,
    level: LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach stderr (and *log_file*, if given) handlers to the project logger.

    With ``replace_handlers=False`` existing handlers are kept, which is how
    a host application can add ours next to its own.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def init_logging(
    level: LevelT = "INFO", log_file: str | Path | None = None, log_format: str = DEFAULT_FORMAT
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


logger: logging.Logger = get_logger()

__all__ = ["logger", "configure", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
