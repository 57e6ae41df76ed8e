"""Service layer exports.

Responsibilities:
 - EventBus: outbound publish/subscribe channel toward the UI
 - LoggingService: recent log capture for diagnostics
 - ErrorHandlingService: uncaught exception capture
"""

from .event_bus import EventBus, UIEvent  # noqa: F401
from .logging_service import LoggingService, configure_logging  # noqa: F401
from .error_handling_service import ErrorHandlingService  # noqa: F401

__all__ = [
    "EventBus",
    "UIEvent",
    "LoggingService",
    "configure_logging",
    "ErrorHandlingService",
]
