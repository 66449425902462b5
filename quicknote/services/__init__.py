"""
Services for QuickNote.

- NoteService: Create, list and remove notes
- VoiceCapture: Permission-checked start/stop recording
"""

from quicknote.services.note_service import NoteService, format_title, normalize_keywords
from quicknote.services.voice_capture import RecordingStatus, VoiceCapture

__all__ = [
    "NoteService",
    "VoiceCapture",
    "RecordingStatus",
    "normalize_keywords",
    "format_title",
]
