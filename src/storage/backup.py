"""Timestamped snapshots of the document set.

A backup is a folder ``<data_dir>/backups/<base_name>_<YYYYMMDD_HHMMSS>``
holding byte-identical copies of whichever documents existed at capture
time. Missing documents are skipped. Backups are never mutated or deleted
here; retention belongs to whoever calls ``list_backups``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List

from config import settings
from core import filesystem
from core.errors import StoreIOError

from .documents import DocumentName, DocumentStore

__all__ = ["BackupInfo", "BackupManager"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupInfo:
    """A snapshot folder found on disk.

    Attributes
    ----------
    name: Folder name (``<base_name>_<timestamp>``).
    path: Absolute folder path.
    created: Timestamp parsed from the folder name (None if it does not parse).
    documents: Document names present in the folder.
    """

    name: str
    path: str
    created: datetime | None
    documents: tuple[str, ...] = field(default_factory=tuple)


class BackupManager:
    def __init__(
        self,
        store: DocumentStore,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def backup_root(self) -> str:
        return os.path.join(self._store.resolve_data_dir(), settings.BACKUP_DIRNAME)

    def create_backup(self, base_name: str) -> str:
        """Copy every existing document into a new timestamped folder.

        Returns the absolute folder path. A copy failure aborts the run and
        leaves the documents already copied in place.
        """
        root = self.backup_root
        try:
            filesystem.ensure_dir(root)
        except OSError as exc:
            raise StoreIOError(
                f"Failed to create backup directory: {exc}", context={"path": root}
            ) from exc

        timestamp = self._clock().strftime(settings.BACKUP_TIMESTAMP_FORMAT)
        folder = os.path.join(root, f"{base_name}_{timestamp}")
        try:
            filesystem.ensure_dir(folder)
        except OSError as exc:
            raise StoreIOError(
                f"Failed to create backup folder: {exc}", context={"path": folder}
            ) from exc

        copied = 0
        for doc in DocumentName:
            source = self._store.path_for(doc)
            if not os.path.exists(source):
                continue
            destination = os.path.join(folder, doc.filename)
            try:
                filesystem.copy_file(source, destination)
            except OSError as exc:
                raise StoreIOError(
                    f"Failed to backup {doc.filename}: {exc}",
                    context={"source": source, "destination": destination},
                ) from exc
            copied += 1
        _log.info("Created backup %s (%d documents)", folder, copied)
        return os.path.abspath(folder)

    def list_backups(self) -> List[BackupInfo]:
        """Return existing snapshot folders, newest first."""
        root = self.backup_root
        if not os.path.isdir(root):
            return []
        out: List[BackupInfo] = []
        for entry in os.scandir(root):
            if not entry.is_dir():
                continue
            present = tuple(
                doc.value
                for doc in DocumentName
                if os.path.isfile(os.path.join(entry.path, doc.filename))
            )
            out.append(
                BackupInfo(
                    name=entry.name,
                    path=os.path.abspath(entry.path),
                    created=_parse_timestamp(entry.name),
                    documents=present,
                )
            )
        out.sort(key=lambda b: (b.created or datetime.min, b.name), reverse=True)
        return out


def _parse_timestamp(folder_name: str) -> datetime | None:
    # Timestamp is the trailing "YYYYMMDD_HHMMSS"; base names may contain underscores
    parts = folder_name.rsplit("_", 2)
    if len(parts) != 3:
        return None
    try:
        return datetime.strptime(f"{parts[1]}_{parts[2]}", settings.BACKUP_TIMESTAMP_FORMAT)
    except ValueError:
        return None
