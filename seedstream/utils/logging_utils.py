# seedstream/utils/logging_utils.py

"""
Logging helpers for the seedstream package.

Every module logs through a child of the "seedstream" logger:

    from seedstream.utils.logging_utils import get_logger

    logger = get_logger(__name__)
    logger.debug("Generator reset")

As a library, seedstream is silent until the application opts in. The
package logger carries a NullHandler and never touches the root logger;
`configure_logging` attaches a stream (and optionally a file) handler to
the package logger only.

The library never logs per draw. It logs construction, resets,
override-registry changes and table rebuilds.
"""

from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path
from typing import Dict, List, Optional

from seedstream.config import LOG_FILENAME, LOG_LEVEL, LOGS_DIR


PACKAGE_LOGGER = "seedstream"

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Multiple calls with the same name return the same logger instance.
_LOGGER_CACHE: Dict[str, Logger] = {}

# Handlers installed by configure_logging, so a second call replaces them.
_INSTALLED_HANDLERS: List[logging.Handler] = []

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def _ensure_log_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _qualify(name: Optional[str]) -> str:
    if not name:
        return PACKAGE_LOGGER
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return name
    return f"{PACKAGE_LOGGER}.{name}"


def configure_logging(
    level: int = LOG_LEVEL,
    log_to_file: bool = False,
    log_to_stdout: bool = True,
    filename: str = LOG_FILENAME,
) -> Logger:
    """
    Route seedstream's log records somewhere visible.

    Safe to call repeatedly: handlers from an earlier call are removed
    and closed before the new ones are attached.

    Args:
        level:
            Level of the package logger (e.g. logging.INFO, logging.DEBUG).
        log_to_file:
            If True, also write to config.LOGS_DIR / filename. Off by
            default so that using the library never touches the
            filesystem.
        log_to_stdout:
            If True, log to the process's standard stream.
        filename:
            Name of the log file inside LOGS_DIR.

    Returns:
        The package logger.
    """
    package = logging.getLogger(PACKAGE_LOGGER)

    for handler in _INSTALLED_HANDLERS:
        package.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()

    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    if log_to_file:
        _ensure_log_dir(LOGS_DIR)
        fh = logging.FileHandler(LOGS_DIR / filename, encoding="utf-8")
        fh.setFormatter(formatter)
        _INSTALLED_HANDLERS.append(fh)

    if log_to_stdout:
        sh = logging.StreamHandler()
        sh.setFormatter(formatter)
        _INSTALLED_HANDLERS.append(sh)

    for handler in _INSTALLED_HANDLERS:
        package.addHandler(handler)

    # Our own handlers already print; don't print twice through root.
    package.propagate = not _INSTALLED_HANDLERS
    package.setLevel(level)
    return package


def get_logger(name: Optional[str] = None) -> Logger:
    """
    Get a logger inside the seedstream hierarchy.

    Args:
        name:
            Usually __name__ of the caller. Names outside the package
            are nested under "seedstream."; None gives the package
            logger itself.

    Returns:
        logging.Logger instance. Its level is left unset so it follows
        whatever `configure_logging` (or the application) sets on the
        package logger.
    """
    qualified = _qualify(name)
    if qualified in _LOGGER_CACHE:
        return _LOGGER_CACHE[qualified]

    logger = logging.getLogger(qualified)
    _LOGGER_CACHE[qualified] = logger
    return logger
