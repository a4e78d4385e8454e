"""Shared fixtures for notes client tests."""
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import respx

from notes_client.core.config import get_settings
from notes_client.core.session import MemoryTokenStorage, SessionStore
from notes_client.services.api_client import NotesApiClient

API_URL = "http://localhost:3000"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Settings are cached per process; isolate tests from each other."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def session() -> SessionStore:
    """Logged-in session backed by memory."""
    store = SessionStore(MemoryTokenStorage(), key="token")
    store.set_token("test-token")
    return store


@pytest.fixture
def unauthorized_calls() -> list[str]:
    """Records every on_unauthorized callback invocation."""
    return []


@pytest.fixture
def mock_api() -> Generator[respx.MockRouter]:
    """Context manager for mocking API responses."""
    with respx.mock(base_url=API_URL, assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
async def api(
    mock_api: respx.MockRouter,
    session: SessionStore,
    unauthorized_calls: list[str],
) -> AsyncGenerator[NotesApiClient]:
    """API client created inside the respx context so requests are captured."""
    client = NotesApiClient(
        session,
        on_unauthorized=lambda: unauthorized_calls.append("login"),
        base_url=API_URL,
    )
    yield client
    await client.aclose()


def make_note_json(
    note_id: int | str = 1,
    title: str = "A",
    body: str = "",
    tags: list[str] | None = None,
    pinned: bool = False,
    archived_at: str | None = None,
) -> dict[str, Any]:
    """Note as the server serializes it."""
    return {
        "id": note_id,
        "title": title,
        "body": body,
        "tags": tags or [],
        "pinned": pinned,
        "archivedAt": archived_at,
        "createdAt": "2025-01-05T14:30:00Z",
        "updatedAt": "2025-01-05T14:30:00Z",
    }


class RecordingNotifier:
    """Notifier that keeps every message."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class RecordingClipboard:
    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text


@pytest.fixture
def note_json() -> Any:
    """Factory for server-shaped note payloads."""
    return make_note_json


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()
