"""
Package logger for pypointcloud.

Writes to the console, a file, or both, with independent level thresholds.
"""
import os
import sys
import time
from enum import IntEnum
from typing import Optional, Union


class LogLevel(IntEnum):
    """Log levels, numerically aligned with the standard library."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


_MODES = ('console', 'file', 'both')


class CloudLogger:
    """
    A configurable logger for point cloud operations.
    """
    def __init__(
        self,
        mode: str = 'console',
        log_file: Optional[str] = None,
        console_level: LogLevel = LogLevel.INFO,
        file_level: LogLevel = LogLevel.DEBUG,
        include_timestamp: bool = True,
        name: Optional[str] = None
    ):
        """
        Initialize the logger.

        Args:
            mode: 'console', 'file', or 'both'
            log_file: Path to log file (required if mode is 'file' or 'both')
            console_level: Minimum log level for console output
            file_level: Minimum log level for file output
            include_timestamp: Whether to prefix messages with a timestamp
            name: Optional name shown in every message
        """
        if mode not in _MODES:
            raise ValueError("mode must be 'console', 'file', or 'both'")
        if mode in ('file', 'both') and not log_file:
            raise ValueError("log_file must be provided when mode is 'file' or 'both'")

        self.mode = mode
        self.log_file = log_file
        self.console_level = LogLevel(console_level)
        self.file_level = LogLevel(file_level)
        self.include_timestamp = include_timestamp
        self.name = name

        if self.log_file and mode != 'console':
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            # Truncate at start
            with open(self.log_file, 'w'):
                pass

    @property
    def _to_console(self) -> bool:
        return self.mode in ('console', 'both')

    @property
    def _to_file(self) -> bool:
        return self.mode in ('file', 'both')

    def isEnabledFor(self, level: LogLevel) -> bool:
        """True if a message at ``level`` would be written anywhere."""
        return ((self._to_console and level >= self.console_level) or
                (self._to_file and level >= self.file_level))

    def _format_message(self, message: str, level: LogLevel) -> str:
        parts = []
        if self.include_timestamp:
            parts.append(f"[{time.strftime('%Y-%m-%d %H:%M:%S')}]")
        parts.append(f"[{level.name}]")
        if self.name:
            parts.append(f"[{self.name}]")
        parts.append(message)
        return " ".join(parts)

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """
        Log a message with the specified level.

        Args:
            message: The message to log
            level: The log level (default: INFO)
        """
        level = LogLevel(level)
        if not self.isEnabledFor(level):
            return
        formatted = self._format_message(message, level)
        if self._to_console and level >= self.console_level:
            stream = sys.stderr if level >= LogLevel.WARNING else sys.stdout
            print(formatted, file=stream)
        if self._to_file and level >= self.file_level:
            with open(self.log_file, 'a') as f:
                f.write(formatted + '\n')

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> None:
        self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def critical(self, message: str) -> None:
        self.log(message, LogLevel.CRITICAL)

    def __call__(self, message: str, level: Union[str, LogLevel] = LogLevel.INFO) -> None:
        """Shorthand for ``log``; ``level`` may be given by name."""
        if isinstance(level, str):
            level = LogLevel.__members__.get(level.upper(), LogLevel.INFO)
        self.log(message, level)


DEFAULT_LOGGER = CloudLogger(mode='console', name='pypointcloud')


def get_logger(name: Optional[str] = None) -> CloudLogger:
    """
    Return the package logger.

    Args:
        name: Ignored, accepted for compatibility with ``logging.getLogger``
    """
    return DEFAULT_LOGGER


def set_logger(logger: Optional[CloudLogger]) -> None:
    """
    Replace the package logger, or restore the default with ``None``.
    """
    global DEFAULT_LOGGER
    if logger is None:
        DEFAULT_LOGGER = CloudLogger(mode='console', name='pypointcloud')
    elif not isinstance(logger, CloudLogger):
        raise ValueError("Logger must be an instance of CloudLogger")
    else:
        DEFAULT_LOGGER = logger
