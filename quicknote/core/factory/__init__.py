"""
Factory modules for creating QuickNote components.
"""

from quicknote.core.factory.store_factory import NoteStoreFactory

__all__ = [
    "NoteStoreFactory",
]
