"""
Tests for the note service.

Tests cover:
1. Keyword normalization
2. Title and timestamp stamping
3. Validation of empty notes
4. Listing and removal passthroughs
"""

from datetime import datetime

import pytest
from loguru import logger

from quicknote.core.note_store.sqlite_store import SQLiteNoteStore
from quicknote.services.note_service import NoteService, format_title, normalize_keywords
from quicknote.utils.exceptions import NotFoundError, StorageUnavailableError, ValidationError
from quicknote.utils.timestamps import to_ms


class TestNormalizeKeywords:
    """Tests for keyword splitting."""

    def test_mixed_commas(self):
        """Test ASCII and full-width commas both separate keywords."""
        assert normalize_keywords("a, b，c,,  ") == ["a", "b", "c"]

    def test_empty_input(self):
        """Test empty and None input produce no keywords."""
        assert normalize_keywords("") == []
        assert normalize_keywords(None) == []
        assert normalize_keywords(" , ，, ") == []

    def test_order_and_duplicates_kept(self):
        """Test order is preserved and duplicates are not removed."""
        assert normalize_keywords("z,a,z") == ["z", "a", "z"]

    def test_inner_whitespace_kept(self):
        """Test only surrounding whitespace is trimmed."""
        assert normalize_keywords("  machine learning ,  读书笔记 ") == [
            "machine learning",
            "读书笔记",
        ]

    def test_other_punctuation_not_a_separator(self):
        """Test semicolons and the ideographic enumeration comma do not split."""
        assert normalize_keywords("a;b、c") == ["a;b、c"]


class TestFormatTitle:
    """Tests for title formatting."""

    def test_default_format(self):
        """Test the default title format."""
        assert format_title(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02 03:04:05"

    def test_custom_format(self):
        """Test a custom strftime format."""
        assert format_title(datetime(2024, 1, 2), "%d/%m/%Y") == "02/01/2024"


class TestCreateNote:
    """Tests for create_note."""

    @pytest.mark.asyncio
    async def test_create_text_note(self, service):
        """Test a text note is normalized, stamped and stored."""
        note = await service.create_note("Call the dentist", "health, 待办")

        expected_ms = to_ms(datetime(2024, 3, 15, 8, 30, 0))
        assert note.id is not None
        assert note.title == "2024-03-15 08:30:00"
        assert note.content == "Call the dentist"
        assert note.keywords == ["health", "待办"]
        assert note.audio_uri is None
        assert note.created_at == expected_ms
        assert note.updated_at == expected_ms
        assert note.is_sync is False
        assert note.device_id == "test-device"

    @pytest.mark.asyncio
    async def test_empty_note_rejected(self, service, note_store):
        """Test a note with no text and no audio raises ValidationError."""
        with pytest.raises(ValidationError):
            await service.create_note("", "", None)

        assert await note_store.count() == 0

    @pytest.mark.asyncio
    async def test_audio_only_note(self, service):
        """Test a note with only an audio reference succeeds."""
        note = await service.create_note("", "", "file://x")

        assert note.audio_uri == "file://x"
        assert note.content == ""

    @pytest.mark.asyncio
    async def test_empty_audio_uri_treated_as_absent(self, service):
        """Test an empty audio reference is not stored and does not count."""
        with pytest.raises(ValidationError):
            await service.create_note("   ", "tag", "")

        note = await service.create_note("text", "", "")
        assert note.audio_uri is None

    @pytest.mark.asyncio
    async def test_uses_configured_title_format(self, note_store, clock):
        """Test the title format comes from the constructor."""
        service = NoteService(store=note_store, title_format="%Y%m%d", clock=clock)

        note = await service.create_note("x")

        assert note.title == "20240315"
        assert note.device_id == "local-device"

    @pytest.mark.asyncio
    async def test_storage_errors_propagate(self, tmp_path, clock):
        """Test store errors reach the caller unchanged."""
        uninitialized = SQLiteNoteStore(db_path=str(tmp_path / "notes.db"))
        service = NoteService(store=uninitialized, clock=clock)

        with pytest.raises(StorageUnavailableError):
            await service.create_note("text")


class TestListAndRemove:
    """Tests for list_notes, get_note and remove_note."""

    @pytest.mark.asyncio
    async def test_list_newest_first(self, service):
        """Test notes created later are listed first."""
        first = await service.create_note("first")
        second = await service.create_note("second")
        third = await service.create_note("third")

        notes = await service.list_notes()

        assert [note.id for note in notes] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_empty(self, service):
        """Test listing with no notes returns an empty list."""
        assert await service.list_notes() == []

    @pytest.mark.asyncio
    async def test_get_note(self, service):
        """Test get_note returns a stored note."""
        created = await service.create_note("hello", "greeting")

        assert await service.get_note(created.id) == created

    @pytest.mark.asyncio
    async def test_get_missing_note(self, service):
        """Test get_note raises NotFoundError for an unknown id."""
        with pytest.raises(NotFoundError):
            await service.get_note(12345)

    @pytest.mark.asyncio
    async def test_get_missing_note_is_logged(self, service):
        """Test a failed lookup is logged like the other operations."""
        messages = []
        handler_id = logger.add(messages.append, level="ERROR")
        try:
            with pytest.raises(NotFoundError):
                await service.get_note(12345)
        finally:
            logger.remove(handler_id)

        assert any("Failed to get note 12345" in message for message in messages)

    @pytest.mark.asyncio
    async def test_remove_note(self, service):
        """Test a removed note no longer lists, and removing again fails."""
        keep = await service.create_note("keep")
        drop = await service.create_note("drop")

        await service.remove_note(drop.id)

        notes = await service.list_notes()
        assert [note.id for note in notes] == [keep.id]

        with pytest.raises(NotFoundError):
            await service.remove_note(drop.id)
