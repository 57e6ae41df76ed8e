"""Local document store (profiles, activities, settings, todos).

Public exports: the store itself plus the backup and transfer managers
layered on top of it.
"""

from .documents import DocumentName, DocumentStore, DEFAULTS, parse_document_name  # noqa: F401
from .backup import BackupInfo, BackupManager  # noqa: F401
from .transfer import TransferManager  # noqa: F401

__all__ = [
    "DocumentName",
    "DocumentStore",
    "DEFAULTS",
    "parse_document_name",
    "BackupInfo",
    "BackupManager",
    "TransferManager",
]
