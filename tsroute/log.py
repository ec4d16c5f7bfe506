"""Levelled logging to standard output or standard error."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass


class LogLevel(enum.IntEnum):
    """Severity of a log message, ordered from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


class LogStream(enum.Enum):
    """Where log messages are written."""

    NONE = "none"
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass
class _Settings:
    level: LogLevel = LogLevel.INFO
    stream: LogStream = LogStream.STDERR


_settings = _Settings()


def set_global_logstream(stream: LogStream) -> None:
    """Choose the stream every later message is written to."""
    _settings.stream = LogStream(stream)


def set_global_loglevel(level: LogLevel) -> None:
    """Choose the lowest level that is still written."""
    _settings.level = LogLevel(level)


def get_global_logstream() -> LogStream:
    """Return the stream messages are currently written to."""
    return _settings.stream


def get_global_loglevel() -> LogLevel:
    """Return the lowest level that is currently written."""
    return _settings.level


def _target():
    if _settings.stream is LogStream.STDOUT:
        return sys.stdout
    if _settings.stream is LogStream.STDERR:
        return sys.stderr
    return None


def log_message(level: LogLevel, filename: str, line: int, message: str) -> None:
    """Write a message if its level passes the global threshold.

    INFO messages are written bare; every other level is prefixed with the
    level name and the last path component of ``filename`` with ``line``.
    """
    level = LogLevel(level)
    stream = _target()
    if stream is None or not message or level < _settings.level:
        return
    if level is LogLevel.INFO:
        text = message
    else:
        name = filename.rsplit("/", 1)[-1]
        text = f"{level.name} {name}:{line} {message}"
    print(text, file=stream, flush=True)