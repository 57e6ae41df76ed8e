"""Logging service.

Captures recent log records into a ring buffer so a diagnostics panel in the
UI can show them, and forwards a short summary of each record over the
``EventBus`` as ``UIEvent.LOG_RECORD_ADDED``.

Also owns ``configure_logging`` which sets the root level/format once at
startup.
"""

from __future__ import annotations

import json
import logging
import os
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, UIEvent

__all__ = [
    "LogEntry",
    "LoggingService",
    "configure_logging",
]

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a stderr handler on the root logger (idempotent)."""
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if not any(getattr(h, "_focusdesk_console", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._focusdesk_console = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float
    pathname: str
    lineno: int


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500, *, event_bus: EventBus | None = None) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._event_bus = event_bus
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach_root(self) -> None:
        if self._attached:
            return
        logging.getLogger().addHandler(self._handler)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
            pathname=record.pathname,
            lineno=record.lineno,
        )
        with self._lock:
            self._entries.append(entry)
        # Records logged by the bus itself are not echoed back onto it
        if self._event_bus is not None and not entry.name.endswith("event_bus"):
            self._event_bus.publish(
                UIEvent.LOG_RECORD_ADDED,
                {
                    "level": entry.level,
                    "name": entry.name,
                    "message": entry.message[:120],
                    "created": entry.created,
                },
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # Export ------------------------------------------------------------
    def export_jsonl(
        self,
        path: str | None = None,
        *,
        level: str | None = None,
        name_contains: str | None = None,
        append: bool = False,
    ) -> int:
        """Export filtered log entries as JSON Lines.

        Returns number of lines written.
        """
        entries = self.filter(level=level, name_contains=name_contains)
        file_path = path or os.path.join(os.getcwd(), "focusdesk-logs.jsonl")
        with open(file_path, "a" if append else "w", encoding="utf-8") as f:
            for e in entries:
                f.write(
                    json.dumps(
                        {
                            "level": e.level,
                            "name": e.name,
                            "message": e.message,
                            "created": e.created,
                            "file": e.pathname,
                            "line": e.lineno,
                        },
                        sort_keys=True,
                    )
                    + "\n"
                )
        return len(entries)
