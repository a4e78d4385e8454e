"""
Session token storage.

The session is an opaque bearer token. Presence of a token means "authenticated";
there is no local expiry or signature check. A stored token is treated as valid
until a request using it is rejected by the server.
"""
import json
import logging
import os
from pathlib import Path

from notes_client.core.config import get_settings
from notes_client.core.interfaces import TokenStorage

logger = logging.getLogger(__name__)


class MemoryTokenStorage:
    """Process-local token storage. Nothing survives a restart."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileTokenStorage:
    """
    Token storage backed by a JSON file, so a restart preserves the login.

    The file is created on first write. A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Swap in a fully written sibling; an interrupted write leaves the old file
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class SessionStore:
    """
    Owns the session token.

    Every API request reads it. Only the API client's 401 handling and explicit
    login/logout write it.
    """

    def __init__(self, storage: TokenStorage, key: str | None = None) -> None:
        self._storage = storage
        self._key = key or get_settings().token_key

    def get_token(self) -> str | None:
        """Return the stored token, or None if logged out."""
        return self._storage.get(self._key) or None

    def set_token(self, token: str) -> None:
        """Persist a new token."""
        if not token:
            raise ValueError("Token cannot be empty")
        self._storage.set(self._key, token)
        logger.debug("Session token stored")

    def clear_token(self) -> None:
        """Remove the token. Safe to call when already logged out."""
        self._storage.delete(self._key)
        logger.debug("Session token cleared")

    @property
    def is_authenticated(self) -> bool:
        """True when a token is present. No expiry validation is performed."""
        return self.get_token() is not None


def create_session_store() -> SessionStore:
    """Build a file-backed session store from settings."""
    settings = get_settings()
    return SessionStore(FileTokenStorage(settings.token_file), key=settings.token_key)
