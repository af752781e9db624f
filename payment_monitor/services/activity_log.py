"""Activity log service - bounded in-memory record of recent operational events"""
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Dict, Any, List

from payment_monitor.core.logging import activity_logger
from payment_monitor.schemas.activity import LogEntry, LogLevel

DEFAULT_CAPACITY = 100
DEFAULT_QUERY_LIMIT = 50

_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.ERROR: logging.ERROR,
}


def _utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ActivityLog:
    """
    Newest-first ring buffer of log entries, owned by one application instance.

    Each ``record`` is a single appendleft on a bounded deque, so the oldest
    entry falls off the end once capacity is reached.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, logger: logging.Logger = activity_logger):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque = deque(maxlen=capacity)
        self._logger = logger

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, message: str, level: LogLevel = LogLevel.INFO) -> LogEntry:
        """Add an entry to the front of the log and echo it to the logging module.

        Args:
            message: Human readable description of the event
            level: ``LogLevel.INFO`` or ``LogLevel.ERROR`` (plain strings are accepted)

        Returns:
            The stored entry
        """
        level = LogLevel(level)
        entry = LogEntry(timestamp=_utc_timestamp(), level=level, message=message)
        self._logger.log(_LEVELS[level], message)
        self._entries.appendleft(entry)
        return entry

    def error(self, message: str) -> LogEntry:
        return self.record(message, LogLevel.ERROR)

    def entries(self, limit: int = DEFAULT_QUERY_LIMIT) -> List[LogEntry]:
        if limit <= 0:
            return []
        return list(self._entries)[:limit]

    def query(self, limit: int = DEFAULT_QUERY_LIMIT) -> Dict[str, Any]:
        """Most recent entries up to ``limit`` plus the total number held"""
        return {
            "logs": self.entries(limit),
            "total": len(self._entries),
        }
