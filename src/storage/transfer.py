"""Export / import of single documents to and from arbitrary file paths.

Import validates that the source parses as JSON before anything touches the
store; the raw source text (not a re-serialized form) then replaces the
target document so whitespace and key order survive.
"""

from __future__ import annotations

import json
import logging
import os

from core import filesystem
from core.errors import NotFoundError, StoreIOError, ValidationError

from .documents import DocumentName, DocumentStore, parse_document_name

__all__ = ["TransferManager"]

_log = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    # NaN / Infinity are accepted by the json module but are not valid JSON
    raise ValueError(f"Invalid constant {name!r}")


class TransferManager:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def export(self, data_type: str | DocumentName, dest_path: str) -> None:
        """Copy the stored document byte-for-byte to ``dest_path``."""
        doc = parse_document_name(data_type)
        source = self._store.path_for(doc)
        if not os.path.exists(source):
            raise NotFoundError(f"No {doc.value} data found", context={"path": source})
        try:
            filesystem.copy_file(source, dest_path)
        except OSError as exc:
            raise StoreIOError(
                f"Failed to export {doc.value}: {exc}",
                context={"source": source, "destination": dest_path},
            ) from exc
        _log.info("Exported %s to %s", doc.value, dest_path)

    def import_(self, data_type: str | DocumentName, src_path: str) -> None:
        """Replace the stored document with the JSON text found at ``src_path``."""
        doc = parse_document_name(data_type)
        if not os.path.exists(src_path):
            raise NotFoundError("Source file not found", context={"path": src_path})
        try:
            content = filesystem.read_text(src_path)
        except UnicodeDecodeError as exc:
            raise ValidationError(
                f"Invalid JSON format: {exc}", context={"path": src_path}
            ) from exc
        except OSError as exc:
            raise StoreIOError(
                f"Failed to read import file: {exc}", context={"path": src_path}
            ) from exc
        try:
            json.loads(content, parse_constant=_reject_constant)
        except ValueError as exc:
            _log.warning("Rejected %s import from %s: %s", doc.value, src_path, exc)
            raise ValidationError(
                f"Invalid JSON format: {exc}", context={"path": src_path}
            ) from exc
        self._store.write(doc, content)
        _log.info("Imported %s from %s", doc.value, src_path)
