"""Level-filtered logging for the location services.

A debug level of ``0xff`` means "not configured": every message is passed on
at its natural severity.  Levels 1 to 5 act as a threshold, and every message
that gets through is raised to error severity so it is never filtered out
further down.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass

DEFAULT_DEBUG_LEVEL = 0xFF

BOOL_STR = ("False", "True")
VOID_RET = "None"
FROM_AFW = "===>"
TO_MODEM = "--->"
FROM_MODEM = "<---"
TO_AFW = "<==="
EXIT_TAG = "Exiting"
ENTRY_TAG = "Entering"

_log = logging.getLogger("matissehal")


class LogLevel(enum.IntEnum):
    """Message severities, numbered as the debug-level threshold counts them."""

    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    VERBOSE = 5


_PREFIX = {
    LogLevel.ERROR: "W/",
    LogLevel.WARNING: "W/",
    LogLevel.INFO: "I/",
    LogLevel.DEBUG: "D/",
    LogLevel.VERBOSE: "V/",
}

_NATIVE = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.VERBOSE: logging.DEBUG,
}


def get_timestamp(now: float | None = None) -> str:
    """Format a time of day as ``HH:MM:SS.uuuuuu`` (UTC, from epoch seconds)."""
    if now is None:
        now = time.time()
    total_us = int(round(now * 1_000_000))
    seconds, usec = divmod(total_us, 1_000_000)
    hh = seconds // 3600 % 24
    mm = seconds % 3600 // 60
    ss = seconds % 60
    return f"{hh:02d}:{mm:02d}:{ss:02d}.{usec:06d}"


@dataclass
class LocLogger:
    """Holds the configured debug level and timestamp switch."""

    debug_level: int = DEFAULT_DEBUG_LEVEL
    timestamp: int = 0

    def enabled(self, level: LogLevel) -> bool:
        """Tell whether a message of the given level passes the filter."""
        level = LogLevel(level)
        if 1 <= self.debug_level <= 5:
            return self.debug_level >= level
        return self.debug_level == DEFAULT_DEBUG_LEVEL

    def emit(self, level: LogLevel, message: str) -> str | None:
        """Log a message if enabled; return the emitted line, or None."""
        level = LogLevel(level)
        if not self.enabled(level):
            return None
        if self.timestamp:
            message = f"[{get_timestamp()}] {message}"
        line = _PREFIX[level] + message
        if self.debug_level == DEFAULT_DEBUG_LEVEL:
            severity = _NATIVE[level]
        else:
            severity = logging.ERROR
        _log.log(severity, "%s", line)
        return line


_logger = LocLogger()


def loc_logger_init(debug: int, timestamp: int) -> LocLogger:
    """Set the shared logger's debug level and timestamp switch."""
    _logger.debug_level = debug
    _logger.timestamp = timestamp
    return _logger


def get_logger() -> LocLogger:
    """Return the shared logger."""
    return _logger