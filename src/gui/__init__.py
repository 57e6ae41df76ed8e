"""FocusDesk desktop shell public API.

Curated surface for the launcher, the CLI and tests: the outbound event
channel, the window/tray controllers and the bootstrap helper. Importing
this package never creates a QApplication.
"""

from __future__ import annotations

from .services.event_bus import EventBus, UIEvent, Event  # noqa: F401
from .window_controller import WindowController  # noqa: F401
from .tray_controller import TrayController, TrayAction  # noqa: F401

__all__ = [
    "EventBus",
    "UIEvent",
    "Event",
    "WindowController",
    "TrayController",
    "TrayAction",
]
