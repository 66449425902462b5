"""
Note model - the only persisted entity in QuickNote.

A note is a short piece of typed or dictated text, optionally pointing
at a recorded audio clip, and tagged with an ordered list of keywords.
"""

from pydantic import BaseModel, Field


class NoteDraft(BaseModel):
    """
    A note that has not been persisted yet.

    Carries every field except the store-generated ``id``. The store
    assigns the id on insert and returns a full ``Note``.

    ``is_sync`` and ``device_id`` are reserved for a future sync layer.
    Nothing in QuickNote transitions ``is_sync`` to True, and
    ``device_id`` is whatever constant the caller configured.
    """

    title: str = Field(..., description="Display title, set once at creation")
    content: str = Field(default="", description="Note text body")
    keywords: list[str] = Field(default_factory=list, description="Ordered keyword tags")
    audio_uri: str | None = Field(default=None, description="Reference to a recorded audio clip")

    # Timestamps (ms since epoch)
    created_at: int = Field(..., ge=0, description="Creation time in ms since epoch")
    updated_at: int = Field(..., ge=0, description="Last update time in ms since epoch")

    # Reserved sync metadata
    is_sync: bool = Field(default=False, description="Whether the note was synced")
    device_id: str = Field(default="local-device", description="Originating device identifier")

    def has_content(self) -> bool:
        """
        Check whether the note carries anything worth persisting.

        Returns:
            True if the text body is non-blank or an audio clip is attached
        """
        return bool(self.content.strip()) or self.has_audio()

    def has_audio(self) -> bool:
        """
        Check if an audio clip is attached.

        Returns:
            True if audio_uri is set and non-empty
        """
        return bool(self.audio_uri)


class Note(NoteDraft):
    """A persisted note with its store-assigned id."""

    id: int = Field(..., description="Store-generated note id")
