"""
Custom exception hierarchy for QuickNote.

Provides structured error types for the store, codec, service and
audio collaborators. All exceptions inherit from QuickNoteError for
easy catching.
"""


class QuickNoteError(Exception):
    """
    Base exception for all QuickNote errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize QuickNote error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(QuickNoteError):
    """
    Base exception for store operations.
    Used for errors related to note persistence.
    """

    pass


class StorageUnavailableError(StoreError):
    """
    Backing medium errors.
    Raised when the database file cannot be opened or used
    (permissions, disk full, store not initialized).
    """

    pass


class CorruptRecordError(StoreError):
    """
    Record decoding errors.
    Raised when a persisted column is not a well-formed encoding.
    """

    pass


class ValidationError(QuickNoteError):
    """
    Validation errors.
    Raised when input validation fails, e.g. a note with no text and no audio.
    """

    pass


class NotFoundError(QuickNoteError):
    """
    Resource not found errors.
    Raised when a requested note doesn't exist.
    """

    pass


class ConfigurationError(QuickNoteError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class AudioError(QuickNoteError):
    """
    Audio collaborator errors.
    Raised when recording or playback fails or is requested in the wrong state.
    """

    pass


class PermissionDeniedError(AudioError):
    """
    Raised when the user refuses a capability such as the microphone.
    """

    pass
