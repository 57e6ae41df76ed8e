"""Thin façade over the single main window.

Every operation requires a bound, still-alive window and raises
``WindowError`` otherwise. Callers that must tolerate a missing window (the
tray during startup/shutdown) catch that error themselves.

``CloseToTrayFilter`` turns the window's close button into ``hide()`` so the
process keeps running behind the tray icon.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt6.QtCore import QEvent, QObject, Qt

from core.errors import WindowError

__all__ = ["WindowController", "CloseToTrayFilter"]

_log = logging.getLogger(__name__)


class WindowController:
    def __init__(self, window: Any | None = None) -> None:
        self._window = window

    # Binding -------------------------------------------------------
    def bind(self, window: Any) -> None:
        self._window = window

    def unbind(self) -> None:
        self._window = None

    @property
    def window(self) -> Optional[Any]:
        return self._window

    def _require(self, operation: str) -> Any:
        if self._window is None:
            raise WindowError(
                f"Failed to {operation}: main window unavailable",
                context={"operation": operation},
            )
        return self._window

    def _call(self, operation: str, fn) -> Any:
        try:
            return fn(self._require(operation))
        except RuntimeError as exc:
            # PyQt raises RuntimeError once the underlying C++ object is gone
            self._window = None
            raise WindowError(
                f"Failed to {operation}: {exc}", context={"operation": operation}
            ) from exc

    # Public API ----------------------------------------------------
    def show_and_focus(self) -> None:
        def _show(w: Any) -> None:
            if w.isMinimized():
                w.showNormal()
            else:
                w.show()
            w.raise_()
            w.activateWindow()

        self._call("show window", _show)

    def hide(self) -> None:
        self._call("minimize to tray", lambda w: w.hide())
        _log.debug("Main window hidden to tray")

    def set_always_on_top(self, always_on_top: bool) -> None:
        def _apply(w: Any) -> None:
            was_visible = w.isVisible()
            w.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, bool(always_on_top))
            # Changing window flags re-parents the native window and hides it
            if was_visible:
                w.show()

        self._call("set always on top", _apply)
        _log.info("Always-on-top %s", "enabled" if always_on_top else "disabled")

    def is_visible(self) -> bool:
        return bool(self._call("query visibility", lambda w: w.isVisible()))


class CloseToTrayFilter(QObject):
    """Event filter that hides the main window instead of closing it."""

    def __init__(self, controller: WindowController, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller = controller

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt API
        if event.type() == QEvent.Type.Close and obj is self._controller.window:
            event.ignore()
            self._controller.hide()
            return True
        return super().eventFilter(obj, event)
