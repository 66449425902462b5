"""
Voice capture controller.

Drives an AudioRecorder through a start/stop cycle after checking the
microphone permission. State is exposed for polling; each call returns
its own result instead of notifying listeners.
"""

from enum import Enum

from quicknote.core.audio.base import AudioRecorder, PermissionService
from quicknote.utils.exceptions import (
    AudioError,
    PermissionDeniedError,
    QuickNoteError,
    ValidationError,
)
from quicknote.utils.logger import get_logger

logger = get_logger(__name__)

MICROPHONE = "microphone"


class RecordingStatus(str, Enum):
    """Recorder state."""

    IDLE = "idle"
    RECORDING = "recording"


class VoiceCapture:
    """
    Records a clip whose reference can be attached to a new note.

    Usage:
        await capture.start()
        uri = await capture.stop()
        await service.create_note(text, keywords, audio_uri=uri)
        capture.clear()
    """

    def __init__(self, recorder: AudioRecorder, permissions: PermissionService):
        self.recorder = recorder
        self.permissions = permissions
        self.status = RecordingStatus.IDLE
        self.last_uri: str | None = None

    @property
    def is_recording(self) -> bool:
        return self.status == RecordingStatus.RECORDING

    async def start(self) -> str:
        """
        Start recording after the microphone permission is granted.

        Returns:
            Recorder handle for the recording in progress

        Raises:
            PermissionDeniedError: If the microphone permission is refused
            AudioError: If already recording or the recorder fails
        """
        if self.is_recording:
            raise AudioError("Recording already in progress")

        if not await self.permissions.ensure_granted(MICROPHONE):
            logger.warning("Microphone permission refused")
            raise PermissionDeniedError(
                "Microphone permission not granted", context={"capability": MICROPHONE}
            )

        try:
            handle = await self.recorder.start()
        except QuickNoteError:
            raise
        except Exception as e:
            logger.error(f"Failed to start recording: {e}", extra={"operation": "start"})
            raise AudioError(f"Failed to start recording: {e}") from e

        self.status = RecordingStatus.RECORDING
        logger.debug("Recording started")
        return handle

    async def stop(self) -> str:
        """
        Stop recording and keep the clip reference.

        Returns:
            Reference to the recorded clip

        Raises:
            AudioError: If not recording or the recorder fails
        """
        if not self.is_recording:
            raise AudioError("No recording in progress")

        try:
            uri = await self.recorder.stop()
        except Exception as e:
            logger.error(f"Failed to stop recording: {e}", extra={"operation": "stop"})
            raise AudioError(f"Failed to stop recording: {e}") from e
        finally:
            self.status = RecordingStatus.IDLE

        self.last_uri = uri
        logger.debug(f"Recording stopped: {uri}")
        return uri

    async def play(self, uri: str) -> None:
        """
        Play a recorded clip.

        Raises:
            ValidationError: If uri is blank
            AudioError: If playback fails
        """
        if not uri or not uri.strip():
            raise ValidationError("Audio reference cannot be empty")

        try:
            await self.recorder.play(uri)
        except Exception as e:
            logger.error(f"Failed to play {uri}: {e}")
            raise AudioError(f"Failed to play audio: {e}", context={"uri": uri}) from e

    def clear(self) -> None:
        """Forget the last recorded clip once it has been saved with a note."""
        self.last_uri = None
