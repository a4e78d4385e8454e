"""Exceptions for client-side state operations."""
from notes_client.shared.api_errors import NotesClientError


class DraftValidationError(NotesClientError):
    """
    Raised when input is rejected locally, before any network call.

    Used for empty titles on create and update, and when submitting without an
    open draft.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
