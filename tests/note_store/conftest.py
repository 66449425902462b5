"""
Shared test fixtures for note store tests.
"""

import pytest

from quicknote.core.note_store.sqlite_store import SQLiteNoteStore
from quicknote.models.note import NoteDraft


@pytest.fixture
async def store(tmp_path):
    """Create an initialized SQLite note store in a temp directory."""
    store = SQLiteNoteStore(db_path=str(tmp_path / "notes.db"))
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def make_draft():
    """Build NoteDraft objects with sensible defaults."""

    def _make(**overrides) -> NoteDraft:
        fields = {
            "title": "2024-05-01 09:30:00",
            "content": "Buy milk",
            "keywords": ["errands", "home"],
            "audio_uri": None,
            "created_at": 1_714_555_800_000,
            "updated_at": 1_714_555_800_000,
            "device_id": "test-device",
        }
        fields.update(overrides)
        return NoteDraft(**fields)

    return _make
