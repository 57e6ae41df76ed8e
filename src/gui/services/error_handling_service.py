"""Global error handling service.

Captures uncaught exceptions via ``sys.excepthook`` (and ``threading.excepthook``)
so a crash on a tray callback or a worker thread is logged and reported to
the UI instead of vanishing. Keeps a short ring buffer of ``ErrorRecord`` for
inspection.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, List, Optional
import logging
import sys
import threading
import traceback

from .event_bus import EventBus, UIEvent

__all__ = [
    "ErrorRecord",
    "ErrorHandlingService",
]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorRecord:
    """Structured capture of an uncaught exception.

    Attributes
    ----------
    exc_type: type
        Exception class.
    exc_value: BaseException
        Exception instance.
    traceback_str: str
        Formatted traceback text.
    iso_time: str
        ISO 8601 timestamp (UTC).
    thread_name: str
        Name of the thread in which the exception occurred.
    """

    exc_type: type
    exc_value: BaseException
    traceback_str: str
    iso_time: str
    thread_name: str

    def summary(self, max_len: int = 120) -> str:
        msg = f"{self.exc_type.__name__}: {self.exc_value}"
        return msg if len(msg) <= max_len else msg[: max_len - 3] + "..."


class ErrorHandlingService:
    """Installable global error hook manager.

    svc = ErrorHandlingService(event_bus=bus)
    svc.install()
    ... run application ...
    svc.uninstall()
    """

    def __init__(self, *, capacity: int = 20, event_bus: EventBus | None = None) -> None:
        self._errors: Deque[ErrorRecord] = deque(maxlen=max(1, capacity))
        self._event_bus = event_bus
        self._installed = False
        self._prev_sys_hook = None
        self._prev_threading_hook = None

    # ------------------------------------------------------------------
    # Installation / Removal
    # ------------------------------------------------------------------
    def install(self) -> None:
        if self._installed:
            return
        self._prev_sys_hook = sys.excepthook
        sys.excepthook = self._sys_hook
        self._prev_threading_hook = threading.excepthook
        threading.excepthook = self._thread_hook
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        if self._prev_sys_hook is not None:
            sys.excepthook = self._prev_sys_hook
        if self._prev_threading_hook is not None:
            threading.excepthook = self._prev_threading_hook
        self._installed = False

    def _sys_hook(self, exc_type, exc_value, tb):  # pragma: no cover - delegate
        self.handle_exception(exc_type, exc_value, tb)
        if self._prev_sys_hook:
            self._prev_sys_hook(exc_type, exc_value, tb)

    def _thread_hook(self, args):  # pragma: no cover - delegate
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback, thread=args.thread)
        if self._prev_threading_hook:
            self._prev_threading_hook(args)

    # ------------------------------------------------------------------
    # Core logic
    # ------------------------------------------------------------------
    def handle_exception(
        self, exc_type, exc_value, tb, *, thread: Optional[threading.Thread] = None
    ) -> ErrorRecord:
        """Record, log and publish one uncaught exception.

        Public so tests can feed synthetic exceptions without touching the
        interpreter hooks.
        """
        record = ErrorRecord(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback_str="".join(traceback.format_exception(exc_type, exc_value, tb)),
            iso_time=datetime.now(timezone.utc).isoformat(),
            thread_name=(thread.name if thread else threading.current_thread().name),
        )
        self._errors.append(record)
        _log.error("Uncaught exception (%s) %s", record.thread_name, record.summary())
        if self._event_bus is not None:
            self._event_bus.publish(
                UIEvent.UNCAUGHT_EXCEPTION,
                {
                    "type": record.exc_type.__name__,
                    "message": str(record.exc_value),
                    "thread": record.thread_name,
                    "iso_time": record.iso_time,
                },
            )
        return record

    def recent_errors(self) -> List[ErrorRecord]:
        return list(self._errors)

    @property
    def installed(self) -> bool:
        return self._installed

    def clear(self) -> None:
        self._errors.clear()
