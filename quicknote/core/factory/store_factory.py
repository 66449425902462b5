"""
Factory for creating note store backends.
"""

from quicknote.config import StorageConfig
from quicknote.core.note_store.base import NoteStore
from quicknote.core.note_store.sqlite_store import SQLiteNoteStore
from quicknote.utils.exceptions import ConfigurationError


class NoteStoreFactory:
    """Factory for creating note store backends from configuration."""

    @staticmethod
    def create(config: StorageConfig) -> NoteStore:
        """
        Create note store from configuration.

        Args:
            config: Storage configuration

        Returns:
            Note store instance (not yet initialized)

        Raises:
            ConfigurationError: If backend is not supported
        """
        if config.backend == "sqlite":
            return SQLiteNoteStore(db_path=config.db_path)
        else:
            raise ConfigurationError(
                f"Unsupported storage backend: {config.backend}",
                context={"backend": config.backend},
            )
