"""Pluggable loggers and the process-wide log dispatch."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import TextIO

DEFAULT_LOG_FILE = "musicbrowser.log"


class LogLevel(IntEnum):
    NO_LOGGING = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4


class Logger(ABC):
    """Destination for log messages."""

    @abstractmethod
    def debug(self, message: str) -> None: ...

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def warn(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


class FileLogger(Logger):
    """Appends one line per message to a log file."""

    def __init__(self, path: str | Path = DEFAULT_LOG_FILE) -> None:
        self.path = Path(path)

    def _write(self, kind: str, message: str) -> None:
        now = datetime.now()
        stamp = f"{now:%a %b} {now.day} {now:%H:%M:%S %Y}"
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{kind.ljust(8)} - {stamp} - {message}\n")

    def debug(self, message: str) -> None:
        self._write("Debug", message)

    def info(self, message: str) -> None:
        self._write("Info", message)

    def warn(self, message: str) -> None:
        self._write("Warning", message)

    def error(self, message: str) -> None:
        self._write("Error", message)


class ConsoleLogger(Logger):
    """Writes messages to a text stream, standard error by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _write(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(f"{message}\n")
        stream.flush()

    def debug(self, message: str) -> None:
        self._write(message)

    def info(self, message: str) -> None:
        self._write(message)

    def warn(self, message: str) -> None:
        self._write(message)

    def error(self, message: str) -> None:
        self._write(message)


_logger: Logger | None = None
_level: LogLevel = LogLevel.ERROR


def set_logger(logger: Logger | None) -> None:
    global _logger
    _logger = logger


def set_log_level(level: LogLevel) -> None:
    global _level
    _level = LogLevel(level)


def log_debug(message: str) -> None:
    if _level >= LogLevel.DEBUG and _logger is not None:
        _logger.debug(message)


def log_info(message: str) -> None:
    if _level >= LogLevel.INFO and _logger is not None:
        _logger.info(message)


def log_warn(message: str) -> None:
    if _level >= LogLevel.WARNING and _logger is not None:
        _logger.warn(message)


def log_error(message: str) -> None:
    if _level >= LogLevel.ERROR and _logger is not None:
        _logger.error(message)