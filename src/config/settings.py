"""Global configuration and constants for the FocusDesk shell."""

from __future__ import annotations

import os
from typing import Final

APP_IDENTIFIER: Final = "focusdesk"
APP_DISPLAY_NAME: Final = "FocusDesk"

# Empty string means "resolve the per-user app data directory at startup"
DATA_DIR: Final = os.environ.get("FOCUSDESK_DATA_DIR", "")

BACKUP_DIRNAME: Final = "backups"
BACKUP_TIMESTAMP_FORMAT: Final = "%Y%m%d_%H%M%S"  # local time, second precision

LOG_LEVEL: Final = os.environ.get("FOCUSDESK_LOG_LEVEL", "INFO").upper()
LOG_CAPACITY: Final = int(os.environ.get("FOCUSDESK_LOG_CAPACITY", "500"))

LOCK_NAME: Final = "focusdesk.lock"


def resolve_default_data_dir() -> str:
    """Return the directory holding all persisted documents.

    ``FOCUSDESK_DATA_DIR`` wins when set; otherwise the per-user generic data
    location reported by Qt is used with the app identifier appended.
    """
    if DATA_DIR:
        return os.path.abspath(DATA_DIR)
    from PyQt6.QtCore import QStandardPaths  # local import keeps CLI startup light

    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.abspath(os.path.join(base, APP_IDENTIFIER))
