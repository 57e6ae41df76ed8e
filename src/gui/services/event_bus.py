"""Outbound event channel toward the UI layer.

The desktop shell never talks to a concrete UI bridge; it publishes named
events with an optional payload and whoever renders the UI subscribes.

Delivery semantics:
 - Fire-and-forget: ``publish`` never raises because of a subscriber; handler
   failures are captured in ``errors`` and logged.
 - Ordered per event name: subscribers see events in publish order, and each
   active subscriber receives every event published after it subscribed.
 - One-shot subscriptions via ``once=True``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol, Tuple

__all__ = [
    "UIEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
    "TraceEntry",
]

_log = logging.getLogger(__name__)


class UIEvent(str, Enum):  # str subclass so names pass straight to a JS/Qt bridge
    START_FOCUS = "start-focus"
    START_BREAK = "start-break"
    DOCUMENTS_CHANGED = "documents-changed"
    LOG_RECORD_ADDED = "log-record-added"
    UNCAUGHT_EXCEPTION = "uncaught-exception"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str


def _key(name: str | UIEvent) -> str:
    return name.value if isinstance(name, UIEvent) else name


class EventBus:
    """Synchronous publish/subscribe with optional tracing.

    Handlers run on the publishing thread while the lock is NOT held, so a
    handler may subscribe or unsubscribe without deadlock. Tracing keeps a
    fixed-size ring buffer of (name, timestamp, payload summary) tuples.
    """

    DEFAULT_TRACE_CAPACITY = 50
    DEFAULT_ERROR_CAPACITY = 100

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: Deque[tuple[Event, BaseException]] = deque(
            maxlen=self.DEFAULT_ERROR_CAPACITY
        )
        self._tracing_enabled: bool = False
        self._traces: Deque[Tuple[str, float, str]] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | UIEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | UIEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
            if self._tracing_enabled:
                text = "-" if payload is None else str(payload)
                summary = text if len(text) <= 40 else text[:37] + "..."
                self._traces.append((evt.name, evt.timestamp, summary))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - one subscriber must not break emission
                self._errors.append((evt, exc))
                _log.warning("Subscriber for %s failed: %s", key, exc)
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | UIEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    # ------------------------------------------------------------------
    # Tracing
    # ------------------------------------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: int | None = None) -> None:
        with self._lock:
            self._tracing_enabled = enabled
            if capacity is not None and capacity != self._traces.maxlen:
                self._traces = deque(self._traces, maxlen=capacity)

    def clear_traces(self) -> None:
        with self._lock:
            self._traces.clear()

    def recent_trace_entries(self) -> list[TraceEntry]:
        with self._lock:
            return [TraceEntry(name=n, timestamp=ts, summary=s) for (n, ts, s) in self._traces]

    @property
    def tracing_enabled(self) -> bool:
        with self._lock:
            return self._tracing_enabled
