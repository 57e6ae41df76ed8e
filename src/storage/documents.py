"""Local document store for the four named JSON documents.

Each document lives at ``<data_dir>/<name>.json`` and is treated as opaque
text: the store never parses or reshapes what callers write, it only
guarantees that the bytes reach disk.

Default seeding rules (the store's only built-in domain knowledge):
 - ``profiles`` / ``settings``: structured defaults shipped as package data
   (``storage/defaults/*.json``), written to disk on first read.
 - ``todos``: ``{"lists": []}``, written to disk on first read.
 - ``activities``: ``[]``, returned but NOT persisted until the first write.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from core import filesystem
from core.errors import StoreIOError, UnknownTypeError, ValidationError

__all__ = [
    "DocumentName",
    "DocumentStore",
    "DocumentDefault",
    "DEFAULTS",
    "parse_document_name",
]

_log = logging.getLogger(__name__)

_DEFAULTS_DIR = Path(__file__).parent / "defaults"
DOCUMENT_SUFFIX = ".json"


class DocumentName(str, Enum):
    PROFILES = "profiles"
    ACTIVITIES = "activities"
    SETTINGS = "settings"
    TODOS = "todos"

    @property
    def filename(self) -> str:
        return self.value + DOCUMENT_SUFFIX


@dataclass(frozen=True)
class DocumentDefault:
    """Default payload for a document plus whether first read persists it."""

    content: str
    persist: bool


def _load_packaged_default(name: DocumentName) -> str:
    return (_DEFAULTS_DIR / name.filename).read_text(encoding="utf-8")


DEFAULTS: Dict[DocumentName, DocumentDefault] = {
    DocumentName.PROFILES: DocumentDefault(_load_packaged_default(DocumentName.PROFILES), True),
    DocumentName.ACTIVITIES: DocumentDefault("[]", False),
    DocumentName.SETTINGS: DocumentDefault(_load_packaged_default(DocumentName.SETTINGS), True),
    DocumentName.TODOS: DocumentDefault('{"lists": []}', True),
}


def parse_document_name(value: str | DocumentName) -> DocumentName:
    """Map a logical name (``"profiles"`` ...) onto ``DocumentName``.

    Raises ``UnknownTypeError`` for anything outside the four known names.
    """
    if isinstance(value, DocumentName):
        return value
    try:
        return DocumentName(value)
    except ValueError:
        known = ", ".join(n.value for n in DocumentName)
        raise UnknownTypeError(
            f"Invalid data type '{value}' (expected one of: {known})",
            context={"type": value},
        ) from None


class DocumentStore:
    """Persistence of the named JSON documents inside one directory.

    No locking is performed; a single process is expected to own the
    directory. Concurrent writes to the same document are last-write-wins.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = os.path.abspath(os.fspath(data_dir))

    # Paths ---------------------------------------------------------
    def resolve_data_dir(self) -> str:
        """Absolute directory used for all documents."""
        return self._data_dir

    def path_for(self, name: str | DocumentName) -> str:
        doc = parse_document_name(name)
        return os.path.join(self._data_dir, doc.filename)

    def exists(self, name: str | DocumentName) -> bool:
        return os.path.isfile(self.path_for(name))

    # Internal helpers ----------------------------------------------
    def _ensure_dir(self) -> None:
        try:
            filesystem.ensure_dir(self._data_dir)
        except OSError as exc:
            raise StoreIOError(
                f"failed to create app dir: {exc}", context={"path": self._data_dir}
            ) from exc

    # Public API ----------------------------------------------------
    def read(self, name: str | DocumentName) -> str:
        """Return the raw text of a document, seeding its default if absent."""
        doc = parse_document_name(name)
        self._ensure_dir()
        path = self.path_for(doc)
        if not os.path.exists(path):
            default = DEFAULTS[doc]
            if default.persist:
                try:
                    filesystem.write_text(path, default.content)
                except OSError as exc:
                    raise StoreIOError(
                        f"failed to write default {doc.value}: {exc}", context={"path": path}
                    ) from exc
                _log.info("Seeded default %s document at %s", doc.value, path)
            return default.content
        try:
            return filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreIOError(
                f"failed to read {doc.value}: {exc}", context={"path": path}
            ) from exc

    def read_json(self, name: str | DocumentName) -> Any:
        """Convenience: parse the document text (raises ``json.JSONDecodeError``)."""
        return json.loads(self.read(name))

    def write(self, name: str | DocumentName, content: str) -> None:
        """Overwrite a document with ``content`` verbatim.

        The new text replaces the file in one step; a failed write leaves the
        previous content in place.
        """
        doc = parse_document_name(name)
        if not isinstance(content, str):
            raise ValidationError(
                f"failed to write {doc.value}: expected text, got {type(content).__name__}",
                context={"type": doc.value},
            )
        self._ensure_dir()
        path = self.path_for(doc)
        try:
            filesystem.write_text(path, content)
        except (OSError, UnicodeEncodeError) as exc:
            raise StoreIOError(
                f"failed to write {doc.value}: {exc}", context={"path": path}
            ) from exc
        _log.debug("Wrote %s (%d chars)", doc.value, len(content))

    def delete(self, name: str | DocumentName) -> bool:
        """Remove one document. Returns False when it was already absent."""
        doc = parse_document_name(name)
        path = self.path_for(doc)
        try:
            removed = filesystem.remove_if_exists(path)
        except OSError as exc:
            raise StoreIOError(
                f"Failed to remove {doc.filename}: {exc}", context={"path": path}
            ) from exc
        if removed:
            _log.info("Removed %s", path)
        return removed

    def reset_all(self) -> list[DocumentName]:
        """Delete every known document; absent files are skipped.

        Stops at the first removal failure without restoring files already
        removed. Returns the documents that were actually deleted.
        """
        removed: list[DocumentName] = []
        for doc in DocumentName:
            if self.delete(doc):
                removed.append(doc)
        _log.info("Reset data directory %s (%d documents removed)", self._data_dir, len(removed))
        return removed
