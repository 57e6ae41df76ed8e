"""Application layer: bootstrap and process lifecycle."""

from .bootstrap import (  # noqa: F401
    AppContext,
    create_app,
    single_instance,
    acquire_single_instance,
    release_single_instance,
)

__all__ = [
    "AppContext",
    "create_app",
    "single_instance",
    "acquire_single_instance",
    "release_single_instance",
]
