"""Utility modules for QuickNote."""

from quicknote.utils.exceptions import (
    AudioError,
    ConfigurationError,
    CorruptRecordError,
    NotFoundError,
    PermissionDeniedError,
    QuickNoteError,
    StorageUnavailableError,
    StoreError,
    ValidationError,
)
from quicknote.utils.logger import get_logger, setup_logging
from quicknote.utils.timestamps import to_ms

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Timestamps
    "to_ms",
    # Exceptions
    "QuickNoteError",
    "StoreError",
    "StorageUnavailableError",
    "CorruptRecordError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "AudioError",
    "PermissionDeniedError",
]
