"""Logging for shellcomplete.

Completion runs inside the user's shell: messages go to stderr (and to an
optional debug file), never to stdout where candidates are printed.
SHELLCOMPLETE_DEBUG=1 or `--debug <file>` switches to the verbose format.
"""

import logging
import os
import sys

from .ansi import LogStyles, make_style, should_colorize

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]

DEBUG_ENV = "SHELLCOMPLETE_DEBUG"

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"
SCREEN_FORMAT = r"%(message)s"
SCREEN_DEBUG_FORMAT = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d"

_LEVEL_STYLES = {
    logging.WARNING: LogStyles.WARNING,
    logging.ERROR: LogStyles.ERROR,
    logging.CRITICAL: LogStyles.CRITICAL,
}


class LogObjects:
    """Handlers shared by every shellcomplete logger, and the debug switch."""

    handlers: list[logging.Handler] = []
    debug: bool = os.environ.get(DEBUG_ENV, "") not in {"", "0"}


def is_debug() -> bool:
    """Return the current debug state."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    """Set the debug state, for the loggers created afterwards."""
    LogObjects.debug = value


class ScreenLogFormatter(logging.Formatter):
    """Stderr formatter, warnings and errors colored when possible."""

    def __init__(self, debug: bool = False, colors: bool = False) -> None:
        super().__init__()
        fmt = SCREEN_DEBUG_FORMAT if debug else SCREEN_FORMAT
        self._plain = logging.Formatter(fmt)
        self._by_level: dict[int, logging.Formatter] = {}
        for level, codes in _LEVEL_STYLES.items():
            start, end = make_style(*codes) if colors else ("", "")
            self._by_level[level] = logging.Formatter(start + fmt + end)

    def format(self, record: logging.LogRecord) -> str:
        return self._by_level.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """(Re)build the shared handlers.

    Args:
        filename: Optional file receiving every message, timestamped
        force_debug: If True, switch debug mode on
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    screen_handler = logging.StreamHandler(sys.stderr)
    screen_handler.setFormatter(ScreenLogFormatter(debug=is_debug(), colors=should_colorize(sys.stderr)))
    LogObjects.handlers.append(screen_handler)


def get_logger(name: str = "shellcomplete", level: int | None = None) -> logging.Logger:
    """Return a named logger wired to the shared handlers.

    Args:
        name (str): logger's name
        level (int): logger's level (DEBUG in debug mode, WARNING otherwise, if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger
