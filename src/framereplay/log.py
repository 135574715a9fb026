"""
Replay Logging

Log facade for the replay package (Log.info(...), Log.debug(...)), backed by
Python's logging with a colorized console handler.

Redirect replay logs into an application logger:

    from framereplay.log import Log
    Log.set_logger(logging.getLogger("myapp.replay"))

Quiet the per-frame DEBUG chatter while keeping other debug output:

    Log.enable_tick_filter()
"""

import logging
import sys
from logging import Logger

from colorama import init, Fore, Style
init(autoreset=True)

LOGGER_NAME = "framereplay"


class ColorFormatter(logging.Formatter):
    """
    A formatter that colorizes log level names using colorama.
    """
    color_map = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.LIGHTRED_EX,
    }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        # Copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def init_logger(
    name: str = LOGGER_NAME,
    console_logging: bool = True,
    level: int = logging.INFO
) -> Logger:
    """
    Initializes and configures the replay logger.
    :param name: The logger's name.
    :param console_logging: Whether to log to the console (stderr).
    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :return: A configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated init must not stack handlers
    if not logger.handlers:
        if console_logging:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColorFormatter(
                fmt="%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%H:%M:%S"
            ))
            logger.addHandler(console_handler)
        else:
            logger.addHandler(logging.NullHandler())

    return logger


class TickMessageFilter(logging.Filter):
    """
    Drops the per-frame and per-clock-tick DEBUG records.
    """

    FILTER_PATTERNS = [
        "ReplayEngine: Tick",
        "ReplayEngine: Time tick",
        "ReplayEngine: Next frame in",
    ]

    def filter(self, record):
        """Return False to filter out the message, True to allow it"""
        if record.levelno > logging.DEBUG:
            return True

        message = record.getMessage()
        return not any(pattern in message for pattern in self.FILTER_PATTERNS)


class Log:
    """
    Class-level wrapper around the replay logger.
    """
    _logger: Logger = init_logger()
    _tick_filter: TickMessageFilter | None = None

    @classmethod
    def set_logger(cls, logger: Logger):
        """Replace the logger used by the replay package."""
        cls._logger = logger

    @classmethod
    def get_logger(cls) -> Logger:
        return cls._logger

    @classmethod
    def set_level(cls, level: str | int):
        """
        Set the logging level dynamically.

        Args:
            level: Log level as string ("DEBUG", "INFO", "WARNING", "ERROR") or int
        """
        if isinstance(level, str):
            level_map = {
                "DEBUG": logging.DEBUG,
                "INFO": logging.INFO,
                "WARNING": logging.WARNING,
                "ERROR": logging.ERROR,
                "CRITICAL": logging.CRITICAL,
            }
            level = level_map.get(level.upper(), logging.INFO)

        cls._logger.setLevel(level)
        for handler in cls._logger.handlers:
            handler.setLevel(level)

    @classmethod
    def enable_tick_filter(cls, enable: bool = True):
        """
        Enable or disable filtering of per-tick DEBUG messages.

        Args:
            enable: If True, drop tick messages. If False, show all messages.
        """
        if enable:
            if cls._tick_filter is None:
                cls._tick_filter = TickMessageFilter()
            cls._logger.addFilter(cls._tick_filter)
        elif cls._tick_filter is not None:
            cls._logger.removeFilter(cls._tick_filter)

    @classmethod
    def debug(cls, text: str):
        cls._logger.debug(text)

    @classmethod
    def info(cls, text: str):
        cls._logger.info(text)

    @classmethod
    def warning(cls, text: str, exc_info: bool = False):
        if exc_info:
            cls._logger.warning(text, exc_info=True)
        else:
            cls._logger.warning(text)

    @classmethod
    def error(cls, text: str):
        cls._logger.error(text)
