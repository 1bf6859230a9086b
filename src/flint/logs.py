"""Shared user-facing log.

Plugins and the generation engine report progress here. Entries are only ever
appended (or cleared wholesale between runs), and the CLI polls snapshots to
render them while tasks are still running.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class LogKind(str, Enum):
    """Severity/category of a log entry."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    WARN = "warn"
    DEBUG = "debug"


_LEVELS = {
    LogKind.INFO: logging.INFO,
    LogKind.SUCCESS: logging.INFO,
    LogKind.ERROR: logging.ERROR,
    LogKind.WARN: logging.WARNING,
    LogKind.DEBUG: logging.DEBUG,
}


@dataclass(frozen=True)
class LogEntry:
    """A single log line."""

    kind: LogKind
    message: str


class LogStore:
    """Thread-safe append-only list of :class:`LogEntry`.

    Every append is mirrored to the ``flint.logs`` stdlib logger so that
    ``--verbose`` runs show plugin output alongside internal diagnostics.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    def add(self, kind: LogKind, message: str) -> None:
        """Append an entry."""
        entry = LogEntry(kind=LogKind(kind), message=str(message))
        with self._lock:
            self._entries.append(entry)
        logger.log(_LEVELS[entry.kind], "[%s] %s", entry.kind.value, entry.message)

    def info(self, message: str) -> None:
        self.add(LogKind.INFO, message)

    def success(self, message: str) -> None:
        self.add(LogKind.SUCCESS, message)

    def warn(self, message: str) -> None:
        self.add(LogKind.WARN, message)

    def error(self, message: str) -> None:
        self.add(LogKind.ERROR, message)

    def debug(self, value: Any) -> None:
        """Append a pretty-printed JSON rendering of ``value``.

        Raises:
            TypeError: If ``value`` is not JSON serializable
        """
        self.add(LogKind.DEBUG, json.dumps(value, indent=2))

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of all entries in append order."""
        with self._lock:
            return list(self._entries)

    def since(self, index: int) -> list[LogEntry]:
        """Return entries appended after the first ``index`` ones.

        Used by pollers that remember how many entries they have rendered.
        """
        with self._lock:
            return self._entries[index:]

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def count(self, kind: LogKind | None = None) -> int:
        """Count entries, optionally of a single kind."""
        with self._lock:
            if kind is None:
                return len(self._entries)
            return sum(1 for entry in self._entries if entry.kind == kind)

    def __len__(self) -> int:
        return self.count()
