"""Application bootstrap for the FocusDesk shell.

Responsibilities:
 - Resolve the data directory once and inject it into the store
 - Configure logging and install the global error hooks
 - Create the QApplication (unless headless) configured to keep running
   when the last window closes, since the tray owns the process lifetime
 - Construct every component exactly once and hand the references back in
   a single ``AppContext``; nothing is looked up from ambient global state

The bootstrap avoids importing QtWidgets at module import time so tests and
the CLI can build a headless context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
import sys
import tempfile
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import psutil

from config import settings
from gui.commands import CommandSurface
from gui.notifications import NotificationService
from gui.services.error_handling_service import ErrorHandlingService
from gui.services.event_bus import EventBus
from gui.services.logging_service import LoggingService, configure_logging
from gui.tray_controller import TrayController
from gui.window_controller import WindowController
from storage import BackupManager, DocumentStore, TransferManager

_log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    data_dir: Absolute directory holding the documents
    store / backups / transfers: Persistence layer
    event_bus: Outbound event channel toward the UI
    window / tray / notifications: Presentation controllers
    commands: UI-facing command surface
    logging_service / error_service: Diagnostics
    """

    qt_app: Optional[Any]
    headless: bool
    data_dir: str
    store: DocumentStore
    backups: BackupManager
    transfers: TransferManager
    event_bus: EventBus
    window: WindowController
    tray: TrayController
    notifications: NotificationService
    commands: CommandSurface
    logging_service: LoggingService
    error_service: ErrorHandlingService
    metadata: dict[str, Any] = field(default_factory=dict)

    def shutdown(self) -> None:
        self.tray.uninstall()
        self.window.unbind()
        self.error_service.uninstall()
        self.logging_service.detach_root()


def _default_quit(qt_app: Optional[Any]) -> Callable[[int], None]:
    def _quit(code: int) -> None:
        if qt_app is not None:
            qt_app.exit(code)
        else:
            raise SystemExit(code)

    return _quit


def create_app(
    *,
    data_dir: str | None = None,
    headless: bool = False,
    quit_app: Callable[[int], Any] | None = None,
    install_hooks: bool = True,
) -> AppContext:
    """Create and wire the application context.

    Parameters
    ----------
    data_dir: Document directory; resolved from settings when None.
    headless: Skip QApplication creation (tests, CLI).
    quit_app: Callable receiving the exit code for the tray ``quit`` action.
    install_hooks: Install ``sys.excepthook`` / ``threading.excepthook``.
    """
    configure_logging(settings.LOG_LEVEL)
    resolved_dir = os.path.abspath(data_dir or settings.resolve_default_data_dir())

    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])
        qt_app.setApplicationName(settings.APP_DISPLAY_NAME)
        qt_app.setQuitOnLastWindowClosed(False)

    bus = EventBus()
    logging_service = LoggingService(settings.LOG_CAPACITY, event_bus=bus)
    logging_service.attach_root()
    error_service = ErrorHandlingService(event_bus=bus)
    if install_hooks:
        error_service.install()

    store = DocumentStore(resolved_dir)
    backups = BackupManager(store)
    transfers = TransferManager(store)

    window = WindowController()
    tray = TrayController(
        window,
        bus,
        quit_app=quit_app or _default_quit(qt_app),
        tooltip=settings.APP_DISPLAY_NAME,
    )
    notifications = NotificationService(lambda: tray.tray_icon)
    commands = CommandSurface(
        store, backups, transfers, window, notifications, bus, logging_service=logging_service
    )

    _log.info("FocusDesk started (data dir: %s, headless=%s)", resolved_dir, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        data_dir=resolved_dir,
        store=store,
        backups=backups,
        transfers=transfers,
        event_bus=bus,
        window=window,
        tray=tray,
        notifications=notifications,
        commands=commands,
        logging_service=logging_service,
        error_service=error_service,
        metadata={"log_level": settings.LOG_LEVEL},
    )


# --------------------------------------------------------------------------------------
# Single-instance guard (file lock) utilities
# --------------------------------------------------------------------------------------

_LOCK_FD: int | None = None
_LOCK_PATH: str | None = None


def _default_lock_path(name: str = settings.LOCK_NAME) -> str:
    return os.path.join(tempfile.gettempdir(), name)


def _write_pid_lock(path: str) -> int:
    fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_RDWR, 0o644)
    os.write(fd, str(os.getpid()).encode("utf-8"))
    return fd


def acquire_single_instance(
    lock_name: str = settings.LOCK_NAME, *, force_reclaim_stale: bool = True
) -> bool:
    """Attempt to acquire a coarse single-instance file lock.

    Returns True if this process holds the lock, False if another live
    process does. A lock file left behind by a dead PID is reclaimed.
    """
    global _LOCK_FD, _LOCK_PATH
    if _LOCK_FD is not None:
        return True
    path = _default_lock_path(lock_name)
    try:
        _LOCK_FD = _write_pid_lock(path)
        _LOCK_PATH = path
        return True
    except FileExistsError:
        pass
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read().strip()
    except OSError:
        return False
    stale_pid = int(contents) if contents.isdigit() else None
    if stale_pid is None or psutil.pid_exists(stale_pid) or not force_reclaim_stale:
        return False
    _log.info("Reclaiming stale lock %s (pid %s)", path, stale_pid)
    try:
        os.unlink(path)
        _LOCK_FD = _write_pid_lock(path)
    except OSError:  # pragma: no cover - race with another starting instance
        return False
    _LOCK_PATH = path
    return True


def release_single_instance() -> None:
    global _LOCK_FD, _LOCK_PATH
    if _LOCK_FD is None:
        return
    try:
        os.close(_LOCK_FD)
        if _LOCK_PATH and os.path.exists(_LOCK_PATH):
            os.unlink(_LOCK_PATH)
    finally:
        _LOCK_FD = None
        _LOCK_PATH = None


@contextmanager
def single_instance(lock_name: str = settings.LOCK_NAME) -> Iterator[bool]:
    """Yield True if the lock was acquired; release it on exit."""
    acquired = acquire_single_instance(lock_name)
    try:
        yield acquired
    finally:
        if acquired:
            release_single_instance()


__all__ = [
    "AppContext",
    "create_app",
    "single_instance",
    "acquire_single_instance",
    "release_single_instance",
]
