"""Desktop launcher used by `python -m gui` and the `focusdesk-gui` script.

The real UI is rendered by an external layer that talks to
``AppContext.commands`` and subscribes to ``AppContext.event_bus``; the
launcher only provides the host main window, the tray icon and the event
loop.
"""

from __future__ import annotations

import logging

from config import settings
from gui.app.bootstrap import create_app, single_instance
from gui.window_controller import CloseToTrayFilter

_log = logging.getLogger(__name__)


def _build_main_window(data_dir: str):
    from PyQt6.QtWidgets import QLabel, QMainWindow

    win = QMainWindow()
    win.setObjectName("main")
    win.setWindowTitle(settings.APP_DISPLAY_NAME)
    label = QLabel(f"Data directory: {data_dir}")
    label.setMargin(24)
    win.setCentralWidget(label)
    win.resize(420, 560)
    return win


def main() -> int:  # pragma: no cover - runtime
    with single_instance() as acquired:
        if not acquired:
            print(f"Another {settings.APP_DISPLAY_NAME} instance is already running.")  # noqa: T201
            return 1
        ctx = create_app()
        win = _build_main_window(ctx.data_dir)
        ctx.window.bind(win)
        close_filter = CloseToTrayFilter(ctx.window, parent=win)
        win.installEventFilter(close_filter)
        ctx.tray.install()
        win.show()
        code = ctx.qt_app.exec()
        ctx.shutdown()
        _log.info("Event loop finished with code %s", code)
        return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
