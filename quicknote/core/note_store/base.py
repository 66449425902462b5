"""
Base interface for note storage.

The store exclusively owns the persisted representation of notes.
Callers hand it a NoteDraft and get back Notes; they never see rows.
"""

from abc import ABC, abstractmethod

from quicknote.models.note import Note, NoteDraft


class NoteStore(ABC):
    """Abstract base class for note storage implementations."""

    @abstractmethod
    async def initialize(self) -> None:
        """
        Open or create the backing database and ensure the schema exists.

        Safe to call on every process start and more than once.

        Raises:
            StorageUnavailableError: If the backing medium cannot be opened
        """
        pass

    @abstractmethod
    async def insert(self, draft: NoteDraft) -> Note:
        """
        Persist a new note in a single transaction.

        Args:
            draft: Note fields without an id

        Returns:
            The stored note with its assigned id

        Raises:
            ValidationError: If the draft has neither text nor audio
            StorageUnavailableError: If the write fails
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Note]:
        """
        List every note, most recently updated first.

        Ties on updated_at are broken by id ascending.

        Returns:
            Ordered list of notes (possibly empty)

        Raises:
            CorruptRecordError: If a stored row cannot be decoded
        """
        pass

    @abstractmethod
    async def get(self, note_id: int) -> Note | None:
        """
        Retrieve a single note.

        Args:
            note_id: Note identifier

        Returns:
            Note or None if not found
        """
        pass

    @abstractmethod
    async def delete_by_id(self, note_id: int) -> None:
        """
        Delete exactly one note.

        Args:
            note_id: Note identifier

        Raises:
            NotFoundError: If no note has this id
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """
        Count stored notes.

        Returns:
            Number of notes
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the database handle."""
        pass
