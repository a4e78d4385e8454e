"""
Interfaces for the external collaborators the client depends on.

The client never renders, navigates or touches a clipboard itself. The composition
root supplies implementations of these protocols.
"""
from collections.abc import Awaitable, Callable
from typing import Protocol


class TokenStorage(Protocol):
    """Persistent key-value store holding the session token."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        ...


class Notifier(Protocol):
    """Transient user-visible notifications."""

    def success(self, message: str) -> None:
        """Surface a success message."""
        ...

    def error(self, message: str) -> None:
        """Surface an error message."""
        ...


class ConfirmPrompt(Protocol):
    """Asks the user to confirm a destructive action."""

    def __call__(self, message: str) -> bool:
        """Return True when the user confirms."""
        ...


class Clipboard(Protocol):
    """Clipboard write access."""

    def write_text(self, text: str) -> None:
        """Copy text to the clipboard."""
        ...


# Called after a 401 tore down the session, typically to navigate to login.
UnauthorizedCallback = Callable[[], None] | Callable[[], Awaitable[None]]
