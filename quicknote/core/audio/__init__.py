"""
Audio and permission collaborator interfaces.
"""

from quicknote.core.audio.base import AudioRecorder, PermissionService

__all__ = [
    "AudioRecorder",
    "PermissionService",
]
