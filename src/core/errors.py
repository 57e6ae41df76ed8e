"""Error taxonomy shared by the document store and the desktop shell."""

from __future__ import annotations
from typing import Any


class FocusDeskError(Exception):
    """Base class for all errors surfaced to the UI as descriptive messages."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class StoreIOError(FocusDeskError, OSError):
    """Raised when a filesystem create/read/write/copy/remove operation fails."""


class NotFoundError(FocusDeskError):
    """Raised when a referenced document or source file is absent."""


class UnknownTypeError(FocusDeskError, ValueError):
    """Raised when a document type is outside the known set."""


class ValidationError(FocusDeskError, ValueError):
    """Raised when an import source is not syntactically valid JSON."""


class WindowError(FocusDeskError):
    """Raised when the main window handle is unavailable."""
