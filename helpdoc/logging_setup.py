"""Logging setup and utilities.

Module loggers are created at import time with `get_logger`, usually before
`init_logger` runs; initializing attaches the handlers to every logger
created so far and to the ones created afterwards.
"""

import logging

from .ansi import LogStyles, make_style, should_colorize
from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    loggers: dict[str, logging.Logger] = {}
    fixed_levels: set[str] = set()


class _ScreenFormatter(logging.Formatter):
    """Formats records for the terminal, coloured by level.

    Warnings and above are styled unless NO_COLOR is set or stderr is not a TTY.
    """

    def __init__(self, debug: bool) -> None:
        super().__init__()
        fmt = r"%(name)22s - %(message)s // %(filename)s:%(lineno)d" if debug else r"%(levelname)s: %(message)s"
        styled = {
            logging.WARNING: LogStyles.WARNING,
            logging.ERROR: LogStyles.ERROR,
            logging.CRITICAL: LogStyles.CRITICAL,
        }
        colorize = should_colorize()
        self._plain = logging.Formatter(fmt)
        self._by_level: dict[int, logging.Formatter] = {}
        for level, codes in styled.items():
            prefix, suffix = make_style(*codes) if colorize else ("", "")
            self._by_level[level] = logging.Formatter(prefix + fmt + suffix)

    def format(self, record: logging.LogRecord) -> str:
        return self._by_level.get(record.levelno, self._plain).format(record)


def _auto_level() -> int:
    return logging.DEBUG if is_debug() else logging.WARNING


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Replaces previously installed handlers, so calling it twice does not
    duplicate output.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    for logger in LogObjects.loggers.values():
        for handler in LogObjects.handlers:
            logger.removeHandler(handler)
    LogObjects.handlers.clear()

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(_ScreenFormatter(is_debug()))
    LogObjects.handlers.append(stream_handler)

    for name, logger in LogObjects.loggers.items():
        if name not in LogObjects.fixed_levels:
            logger.setLevel(_auto_level())
        for handler in LogObjects.handlers:
            logger.addHandler(handler)


def get_logger(name: str = "helpdoc", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (follows the debug mode if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(_auto_level())
        LogObjects.fixed_levels.discard(name)
    else:
        logger.setLevel(level)
        LogObjects.fixed_levels.add(name)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    LogObjects.loggers[name] = logger
    return logger
