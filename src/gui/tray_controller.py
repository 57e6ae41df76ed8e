"""System tray icon, its menu, and the tray-event to window-action mapping.

The controller is stateless: it issues commands to the ``WindowController``
and trusts the window for visibility state. Mapping:

=====================  ==================================================
left click on icon     show window, focus
menu ``show``          show window, focus
menu ``start_focus``   show window, focus, publish ``start-focus`` ({})
menu ``start_break``   show window, focus, publish ``start-break`` ({})
menu ``quit``          exit the application with code 0
=====================  ==================================================

If the window is unavailable when an event arrives the event is dropped
silently; tray callbacks may fire before the window exists or after it has
been destroyed.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.errors import WindowError

from .services.event_bus import EventBus, UIEvent
from .window_controller import WindowController

__all__ = ["TrayAction", "TrayController", "MENU_LAYOUT"]

_log = logging.getLogger(__name__)


class TrayAction(str, Enum):
    SHOW = "show"
    START_FOCUS = "start_focus"
    START_BREAK = "start_break"
    QUIT = "quit"


# None marks a separator
MENU_LAYOUT: List[Optional[Tuple[TrayAction, str]]] = [
    (TrayAction.SHOW, "Show"),
    None,
    (TrayAction.START_FOCUS, "Start Focus"),
    (TrayAction.START_BREAK, "Start Break"),
    None,
    (TrayAction.QUIT, "Quit"),
]

_EMITTED: Dict[TrayAction, UIEvent] = {
    TrayAction.START_FOCUS: UIEvent.START_FOCUS,
    TrayAction.START_BREAK: UIEvent.START_BREAK,
}


class TrayController:
    def __init__(
        self,
        window: WindowController,
        event_bus: EventBus,
        *,
        quit_app: Callable[[int], Any],
        tooltip: str = "",
    ) -> None:
        self._window = window
        self._bus = event_bus
        self._quit_app = quit_app
        self._tooltip = tooltip
        self._tray: Any | None = None
        self._menu: Any | None = None

    @property
    def tray_icon(self) -> Any | None:
        return self._tray

    # Event handling ------------------------------------------------
    def handle_action(self, action_id: str | TrayAction) -> bool:
        """Dispatch a menu action id. Returns True if the action took effect."""
        try:
            action = TrayAction(action_id)
        except ValueError:
            _log.debug("Ignoring unknown tray action %r", action_id)
            return False
        if action is TrayAction.QUIT:
            _log.info("Quit requested from tray")
            self._quit_app(0)
            return True
        if not self._show_and_focus():
            return False
        event = _EMITTED.get(action)
        if event is not None:
            self._bus.publish(event, {})
        return True

    def handle_left_click(self) -> bool:
        return self._show_and_focus()

    def on_activated(self, reason: Any) -> None:
        """Slot for ``QSystemTrayIcon.activated``."""
        from PyQt6.QtWidgets import QSystemTrayIcon

        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.handle_left_click()

    def _show_and_focus(self) -> bool:
        try:
            self._window.show_and_focus()
        except WindowError as exc:
            _log.debug("Tray event dropped: %s", exc)
            return False
        return True

    # Qt wiring -----------------------------------------------------
    def install(self, icon: Any | None = None, parent: Any | None = None) -> Any:
        """Create and show the ``QSystemTrayIcon`` with its context menu."""
        from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

        if self._tray is not None:
            return self._tray
        if icon is None:
            icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
        tray = QSystemTrayIcon(icon, parent)
        tray.setToolTip(self._tooltip)

        menu = QMenu()
        for item in MENU_LAYOUT:
            if item is None:
                menu.addSeparator()
                continue
            action_id, label = item
            qaction = menu.addAction(label)
            qaction.setObjectName(action_id.value)
            qaction.triggered.connect(lambda _checked=False, a=action_id: self.handle_action(a))
        tray.setContextMenu(menu)
        tray.activated.connect(self.on_activated)
        tray.show()
        self._tray = tray
        self._menu = menu
        _log.debug("Tray icon installed")
        return tray

    def uninstall(self) -> None:
        if self._tray is not None:
            self._tray.hide()
        self._tray = None
        self._menu = None
