"""
Note store implementations for QuickNote.

Provides the abstract base and the SQLite implementation.

Available backends:
- SQLiteNoteStore: Local, single-file embedded database
"""

from quicknote.core.note_store.base import NoteStore
from quicknote.core.note_store.sqlite_store import SQLiteNoteStore

__all__ = [
    "NoteStore",
    "SQLiteNoteStore",
]
