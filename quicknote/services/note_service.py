"""
Note Service - the seam between callers and the note store.

Normalizes raw user input into a NoteDraft, stamps timestamps and the
title, and delegates persistence to the store. Errors are logged and
re-raised unchanged.
"""

import re
from collections.abc import Callable
from datetime import datetime

from quicknote.core.note_store.base import NoteStore
from quicknote.models.note import Note, NoteDraft
from quicknote.utils.exceptions import NotFoundError, QuickNoteError
from quicknote.utils.logger import get_logger
from quicknote.utils.timestamps import to_ms

logger = get_logger(__name__)

DEFAULT_TITLE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ASCII comma and the full-width comma U+FF0C
_KEYWORD_SEPARATORS = re.compile("[,，]")


def normalize_keywords(raw: str | None) -> list[str]:
    """
    Split a raw keyword string into an ordered keyword list.

    Both "," and "，" separate keywords. Fragments are trimmed and empty
    fragments dropped; duplicates are kept.

    Args:
        raw: Keyword input as typed by the user

    Returns:
        Ordered list of non-empty keywords
    """
    if not raw:
        return []
    return [part.strip() for part in _KEYWORD_SEPARATORS.split(raw) if part.strip()]


def format_title(moment: datetime, title_format: str = DEFAULT_TITLE_FORMAT) -> str:
    """Render the display title for a note created at ``moment``."""
    return moment.strftime(title_format)


class NoteService:
    """
    Creates, lists and removes notes.

    The only component UI and audio collaborators talk to.
    """

    def __init__(
        self,
        store: NoteStore,
        device_id: str = "local-device",
        title_format: str = DEFAULT_TITLE_FORMAT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize Note Service.

        Args:
            store: Initialized note store
            device_id: Identifier stamped on every new note
            title_format: strftime format for derived titles
            clock: Source of the current time
        """
        self.store = store
        self.device_id = device_id
        self.title_format = title_format
        self.clock = clock

    async def create_note(
        self,
        raw_content: str,
        raw_keywords: str = "",
        audio_uri: str | None = None,
    ) -> Note:
        """
        Create and persist a note from raw user input.

        Args:
            raw_content: Text body as entered
            raw_keywords: Comma-separated keywords as entered
            audio_uri: Reference to a recorded clip, if any

        Returns:
            The persisted note

        Raises:
            ValidationError: If there is neither text nor audio
            StorageUnavailableError: If the store cannot write
        """
        moment = self.clock()
        timestamp = to_ms(moment)

        draft = NoteDraft(
            title=format_title(moment, self.title_format),
            content=raw_content or "",
            keywords=normalize_keywords(raw_keywords),
            audio_uri=audio_uri or None,
            created_at=timestamp,
            updated_at=timestamp,
            is_sync=False,
            device_id=self.device_id,
        )

        try:
            note = await self.store.insert(draft)
        except QuickNoteError as e:
            logger.error(
                f"Failed to create note: {e}",
                extra={"operation": "create_note", "error_type": type(e).__name__},
            )
            raise

        logger.info(
            f"Note created: {note.id}",
            extra={
                "note_id": note.id,
                "keywords": len(note.keywords),
                "has_audio": note.has_audio(),
            },
        )
        return note

    async def list_notes(self) -> list[Note]:
        """List notes, most recently updated first."""
        try:
            return await self.store.list_all()
        except QuickNoteError as e:
            logger.error(
                f"Failed to list notes: {e}",
                extra={"operation": "list_notes", "error_type": type(e).__name__},
            )
            raise

    async def get_note(self, note_id: int) -> Note:
        """
        Fetch one note.

        Raises:
            NotFoundError: If no note has this id
        """
        try:
            note = await self.store.get(note_id)
            if note is None:
                raise NotFoundError(f"Note {note_id} not found", context={"note_id": note_id})
        except QuickNoteError as e:
            logger.error(
                f"Failed to get note {note_id}: {e}",
                extra={"operation": "get_note", "error_type": type(e).__name__},
            )
            raise

        return note

    async def remove_note(self, note_id: int) -> None:
        """
        Delete a note.

        Callers are expected to have confirmed the deletion with the user.

        Raises:
            NotFoundError: If no note has this id
        """
        try:
            await self.store.delete_by_id(note_id)
        except QuickNoteError as e:
            logger.error(
                f"Failed to remove note {note_id}: {e}",
                extra={"operation": "remove_note", "error_type": type(e).__name__},
            )
            raise

        logger.info(f"Note removed: {note_id}", extra={"note_id": note_id})
