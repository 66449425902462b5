"""
Data models for QuickNote.

Core models:
- NoteDraft: A note before the store assigns its id
- Note: A persisted note
"""

from quicknote.models.note import Note, NoteDraft

__all__ = [
    "Note",
    "NoteDraft",
]
