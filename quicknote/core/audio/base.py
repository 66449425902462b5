"""
Interfaces for the device collaborators QuickNote consumes.

QuickNote does not capture or play audio itself. A platform layer
implements these and hands recorded clips over as opaque references.
"""

from abc import ABC, abstractmethod


class AudioRecorder(ABC):
    """Abstract base for audio capture and playback backends."""

    @abstractmethod
    async def start(self) -> str:
        """
        Begin recording.

        Returns:
            Handle identifying the recording in progress
        """
        pass

    @abstractmethod
    async def stop(self) -> str:
        """
        Finish the current recording.

        Returns:
            Reference (e.g. a file URI) to the recorded clip
        """
        pass

    @abstractmethod
    async def play(self, reference: str) -> None:
        """
        Play a previously recorded clip.

        Args:
            reference: Reference returned by ``stop``
        """
        pass


class PermissionService(ABC):
    """Abstract base for runtime capability checks."""

    @abstractmethod
    async def ensure_granted(self, capability: str) -> bool:
        """
        Check a capability, prompting the user if needed.

        Args:
            capability: Capability name, e.g. "microphone"

        Returns:
            True if the capability is granted
        """
        pass
