"""UI-facing command surface.

The UI layer calls across this boundary by command id (``readProfiles``,
``exportData`` ...) with keyword arguments and always gets a ``CommandResult``
back: either ``ok`` with a value, or a descriptive ``error`` message. No
command retries; retry policy and user messaging belong to the UI.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from core.errors import FocusDeskError, StoreIOError
from storage import BackupManager, DocumentName, DocumentStore, TransferManager

from .notifications import NotificationService
from .services.event_bus import EventBus, UIEvent
from .services.logging_service import LoggingService
from .window_controller import WindowController

__all__ = ["CommandResult", "CommandEntry", "CommandSurface"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class CommandEntry:
    command_id: str
    description: str
    callback: Callable[..., Any]


class CommandSurface:
    """Registry of every command the UI may invoke.

    Thread-safety: commands delegate to the store, which performs no locking;
    concurrent writes to one document are last-write-wins.
    """

    def __init__(
        self,
        store: DocumentStore,
        backups: BackupManager,
        transfers: TransferManager,
        window: WindowController,
        notifications: NotificationService,
        event_bus: EventBus,
        logging_service: Optional[LoggingService] = None,
    ) -> None:
        self._store = store
        self._backups = backups
        self._transfers = transfers
        self._window = window
        self._notifications = notifications
        self._bus = event_bus
        self._logging = logging_service
        self._commands: Dict[str, CommandEntry] = {}
        self._register_defaults()

    # Registration -------------------------------------------------
    def register(self, command_id: str, callback: Callable[..., Any], description: str = "") -> bool:
        """Register a command. Returns False if the id already exists."""
        if command_id in self._commands:
            return False
        self._commands[command_id] = CommandEntry(command_id, description, callback)
        return True

    def list(self) -> List[CommandEntry]:
        return list(self._commands.values())

    def _register_defaults(self) -> None:
        for doc in DocumentName:
            title = doc.value.capitalize()
            self.register(
                f"read{title}", lambda d=doc: self._store.read(d), f"Read {doc.value}.json"
            )
            self.register(
                f"write{title}",
                lambda data, d=doc: self._store.write(d, data),
                f"Overwrite {doc.value}.json",
            )
        self.register("exportData", self.export_data, "Copy one document to a file")
        self.register("importData", self.import_data, "Replace one document from a JSON file")
        self.register("getAppDataDir", self._store.resolve_data_dir, "Data directory path")
        self.register("resetAllData", self.reset_all_data, "Delete every document")
        self.register("backupData", self._backups.create_backup, "Snapshot all documents")
        self.register("listBackups", self.list_backups, "List existing snapshots")
        self.register("setAlwaysOnTop", self._window.set_always_on_top, "Pin the main window")
        self.register("minimizeToTray", self._window.hide, "Hide the main window")
        self.register("showNotification", self._notifications.show_notification, "Desktop notification")
        self.register(
            "requestNotificationPermission",
            self._notifications.request_notification_permission,
            "Notification permission",
        )
        if self._logging is not None:
            self.register("exportLogs", self.export_logs, "Write captured log records as JSON lines")

    # Execution ----------------------------------------------------
    def invoke(self, command_id: str, **kwargs: Any) -> CommandResult:
        entry = self._commands.get(command_id)
        if entry is None:
            return CommandResult(ok=False, error=f"Command not found: {command_id}")
        try:
            inspect.signature(entry.callback).bind(**kwargs)
        except TypeError as exc:
            _log.warning("Command %s called with bad arguments: %s", command_id, exc)
            return CommandResult(ok=False, error=f"Invalid arguments for {command_id}: {exc}")
        try:
            value = entry.callback(**kwargs)
        except FocusDeskError as exc:
            _log.warning("Command %s failed: %s", command_id, exc)
            return CommandResult(ok=False, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            _log.exception("Command %s raised unexpectedly", command_id)
            return CommandResult(ok=False, error=f"{command_id} failed: {exc}")
        return CommandResult(ok=True, value=value)

    # Composite commands -------------------------------------------
    def export_data(self, data_type: str, file_path: str) -> None:
        self._transfers.export(data_type, file_path)

    def import_data(self, data_type: str, file_path: str) -> None:
        self._transfers.import_(data_type, file_path)
        self._bus.publish(UIEvent.DOCUMENTS_CHANGED, {"documents": [data_type]})

    def reset_all_data(self) -> None:
        removed = self._store.reset_all()
        self._bus.publish(UIEvent.DOCUMENTS_CHANGED, {"documents": [d.value for d in removed]})

    def list_backups(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": b.name,
                "path": b.path,
                "created": b.created.isoformat() if b.created else None,
                "documents": list(b.documents),
            }
            for b in self._backups.list_backups()
        ]

    def export_logs(self, file_path: str, level: Optional[str] = None) -> int:
        try:
            return self._logging.export_jsonl(file_path, level=level)
        except OSError as exc:
            raise StoreIOError(
                f"Failed to export logs: {exc}", context={"path": file_path}
            ) from exc
