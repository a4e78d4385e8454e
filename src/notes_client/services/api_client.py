"""
HTTP client for the notes API.

Request pipeline: every authenticated request reads the session store and, when a
token is present, attaches it as a bearer credential.

Response pipeline: a 401 on any request clears the session token and fires the
`on_unauthorized` callback registered by the composition root. The error is still
raised to the caller.
"""
import inspect
import logging
from collections.abc import Generator
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from notes_client.core.config import get_settings
from notes_client.core.interfaces import UnauthorizedCallback
from notes_client.core.session import SessionStore
from notes_client.schemas.auth import Credentials, LoginResponse, SignupData
from notes_client.schemas.note import (
    Note,
    NoteDraft,
    NoteId,
    NoteListResponse,
    NoteUpdate,
    SharedNote,
)
from notes_client.schemas.share import ShareLink
from notes_client.shared.api_errors import ServerError, network_error, raise_for_response

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SessionTokenAuth(httpx.Auth):
    """Attach the current session token, read fresh on every request."""

    def __init__(self, session: SessionStore) -> None:
        self._session = session

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response]:
        token = self._session.get_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def _segment(value: NoteId | str) -> str:
    """Quote a value for use as a single path segment."""
    segment = quote(str(value), safe="")
    # "." and ".." would be resolved as dot-segments by URL normalization
    if not segment.strip("."):
        segment = segment.replace(".", "%2E")
    return segment


def _parse(model: type[ModelT], response: httpx.Response) -> ModelT:
    """Validate a success response body against a schema."""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Unexpected response body from %s: %s", response.request.url, e)
        raise ServerError(
            "Unexpected response from server",
            status_code=response.status_code,
        ) from e


class NotesApiClient:
    """
    Typed operations against the notes API.

    Usage:
        async with NotesApiClient(session, on_unauthorized=go_to_login) as api:
            notes = await api.list_notes({"archived": False})
    """

    def __init__(
        self,
        session: SessionStore,
        *,
        on_unauthorized: UnauthorizedCallback | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            session: Session store holding the bearer token.
            on_unauthorized: Called (sync or async) after a 401 cleared the token.
            base_url: API base URL. Defaults to NOTES_API_URL.
            timeout: Transport timeout in seconds. Defaults to NOTES_API_TIMEOUT.
            http_client: Externally owned client to use instead of creating one.
                It is not closed by `aclose()`.
        """
        settings = get_settings()
        self.session = session
        self.on_unauthorized = on_unauthorized
        self._auth = SessionTokenAuth(session)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            timeout=timeout or settings.api_timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def _handle_unauthorized(self) -> None:
        logger.warning("Session rejected by server, clearing token")
        self.session.clear_token()
        if self.on_unauthorized is not None:
            result = self.on_unauthorized()
            if inspect.isawaitable(result):
                await result

    async def _request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = True,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request through the auth and error pipelines."""
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                auth=self._auth if authenticated else None,
            )
        except httpx.RequestError as e:
            logger.info("%s %s failed: %s", method, path, e)
            raise network_error(e) from e

        if response.status_code == 401:
            await self._handle_unauthorized()
        raise_for_response(response)
        return response

    # Auth

    async def login(self, credentials: Credentials | dict[str, Any]) -> LoginResponse:
        """POST /auth/login. Does not store the token; see AuthService."""
        body = Credentials.model_validate(credentials).model_dump(exclude_none=True)
        response = await self._request("POST", "/auth/login", authenticated=False, json=body)
        return _parse(LoginResponse, response)

    async def signup(self, user_data: SignupData | dict[str, Any]) -> None:
        """POST /auth/signup."""
        body = SignupData.model_validate(user_data).model_dump(exclude_none=True)
        await self._request("POST", "/auth/signup", authenticated=False, json=body)

    # Notes

    async def list_notes(self, params: dict[str, Any] | None = None) -> list[Note]:
        """GET /notes with filter query parameters."""
        response = await self._request("GET", "/notes", params=params or {})
        return _parse(NoteListResponse, response).items

    async def get_note(self, note_id: NoteId) -> Note:
        """GET /notes/:id."""
        response = await self._request("GET", f"/notes/{_segment(note_id)}")
        return _parse(Note, response)

    async def create_note(self, draft: NoteDraft) -> Note:
        """POST /notes."""
        response = await self._request("POST", "/notes", json=draft.to_payload())
        return _parse(Note, response)

    async def update_note(self, note_id: NoteId, patch: NoteUpdate | NoteDraft) -> Note:
        """PATCH /notes/:id. Field-level merging is done by the server."""
        response = await self._request(
            "PATCH", f"/notes/{_segment(note_id)}", json=patch.to_payload(),
        )
        return _parse(Note, response)

    async def delete_note(self, note_id: NoteId) -> None:
        """DELETE /notes/:id."""
        await self._request("DELETE", f"/notes/{_segment(note_id)}")

    async def pin(self, note_id: NoteId) -> None:
        """POST /notes/:id/pin."""
        await self._request("POST", f"/notes/{_segment(note_id)}/pin")

    async def unpin(self, note_id: NoteId) -> None:
        """POST /notes/:id/unpin."""
        await self._request("POST", f"/notes/{_segment(note_id)}/unpin")

    async def archive(self, note_id: NoteId) -> None:
        """POST /notes/:id/archive."""
        await self._request("POST", f"/notes/{_segment(note_id)}/archive")

    async def unarchive(self, note_id: NoteId) -> None:
        """POST /notes/:id/unarchive."""
        await self._request("POST", f"/notes/{_segment(note_id)}/unarchive")

    # Sharing

    async def create_share_link(self, note_id: NoteId) -> ShareLink:
        """POST /s/note/:id."""
        response = await self._request("POST", f"/s/note/{_segment(note_id)}")
        return _parse(ShareLink, response)

    async def delete_share_link(self, note_id: NoteId) -> None:
        """DELETE /s/note/:id."""
        await self._request("DELETE", f"/s/note/{_segment(note_id)}")

    async def get_shared_note(self, share_token: str) -> SharedNote:
        """
        GET /s/:token.

        Public endpoint: sent without credentials and outside the 401 teardown, so a
        rejected share token never logs the user out.
        """
        logger.debug("GET /s/<token>")
        try:
            response = await self._client.get(f"/s/{_segment(share_token)}", auth=None)
        except httpx.RequestError as e:
            raise network_error(e) from e
        raise_for_response(response)
        return _parse(SharedNote, response)
