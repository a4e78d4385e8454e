"""Tests for the notes API client pipelines and typed operations."""
import json
from typing import Any

import httpx
import pytest
import respx
from httpx import Response

from notes_client.core.session import SessionStore
from notes_client.schemas.note import NoteDraft, NoteUpdate
from notes_client.services.api_client import NotesApiClient
from notes_client.shared.api_errors import (
    AuthenticationError,
    NetworkError,
    NotFoundError,
    RequestValidationError,
    ServerError,
)


class TestRequestPipeline:
    """Tests for bearer token attachment."""

    async def test__request__authorization_header_set(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/notes").mock(return_value=Response(200, json={"items": []}))

        await api.list_notes({"archived": False})

        assert mock_api.calls[0].request.headers["authorization"] == "Bearer test-token"

    async def test__request__json_content_type(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/notes").mock(return_value=Response(200, json={"items": []}))

        await api.list_notes()

        assert mock_api.calls[0].request.headers["content-type"] == "application/json"

    async def test__request__no_header_without_token(
        self, mock_api: respx.MockRouter, api: NotesApiClient, session: SessionStore,
    ) -> None:
        session.clear_token()
        mock_api.get("/notes").mock(return_value=Response(200, json={"items": []}))

        await api.list_notes()

        assert "authorization" not in mock_api.calls[0].request.headers

    async def test__request__token_read_fresh_for_each_request(
        self, mock_api: respx.MockRouter, api: NotesApiClient, session: SessionStore,
    ) -> None:
        mock_api.get("/notes").mock(return_value=Response(200, json={"items": []}))

        await api.list_notes()
        session.set_token("second-token")
        await api.list_notes()

        assert mock_api.calls[1].request.headers["authorization"] == "Bearer second-token"

    async def test__get_shared_note__sent_without_credentials(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/s/share-abc").mock(
            return_value=Response(200, json={"title": "Shared", "body": "hello"}),
        )

        shared = await api.get_shared_note("share-abc")

        assert shared.title == "Shared"
        assert "authorization" not in mock_api.calls[0].request.headers


    async def test__login__sent_without_stored_token(
        self, mock_api: respx.MockRouter, api: NotesApiClient, session: SessionStore,
    ) -> None:
        assert session.get_token() == "test-token"
        route = mock_api.post("/auth/login").mock(
            return_value=Response(200, json={"accessToken": "new-token"}),
        )

        await api.login({"email": "a@example.com", "password": "pw"})

        assert "authorization" not in route.calls.last.request.headers

    async def test__signup__sent_without_stored_token(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        route = mock_api.post("/auth/signup").mock(return_value=Response(201))

        await api.signup({"email": "a@example.com", "password": "pw"})

        assert "authorization" not in route.calls.last.request.headers


class TestResponsePipeline:
    """Tests for 401 session teardown."""

    async def test__401__clears_token_and_calls_back(
        self,
        mock_api: respx.MockRouter,
        api: NotesApiClient,
        session: SessionStore,
        unauthorized_calls: list[str],
    ) -> None:
        mock_api.get("/notes").mock(return_value=Response(401, json={"error": {"message": "Expired"}}))

        with pytest.raises(AuthenticationError) as exc_info:
            await api.list_notes()

        assert exc_info.value.message == "Expired"
        assert session.get_token() is None
        assert unauthorized_calls == ["login"]

    async def test__401__later_requests_carry_no_authorization(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.post("/notes/1/pin").mock(return_value=Response(401))
        mock_api.get("/notes").mock(return_value=Response(200, json={"items": []}))

        with pytest.raises(AuthenticationError):
            await api.pin(1)
        await api.list_notes()

        assert "authorization" in mock_api.calls[0].request.headers
        assert "authorization" not in mock_api.calls[1].request.headers

    async def test__401__async_callback_awaited(
        self, mock_api: respx.MockRouter, session: SessionStore,
    ) -> None:
        redirected: list[bool] = []

        async def go_to_login() -> None:
            redirected.append(True)

        mock_api.delete("/notes/3").mock(return_value=Response(401))
        async with NotesApiClient(
            session, on_unauthorized=go_to_login, base_url="http://localhost:3000",
        ) as api:
            with pytest.raises(AuthenticationError):
                await api.delete_note(3)

        assert redirected == [True]

    async def test__401__without_callback_still_clears_token(
        self, mock_api: respx.MockRouter, session: SessionStore,
    ) -> None:
        mock_api.get("/notes/1").mock(return_value=Response(401))
        async with NotesApiClient(session, base_url="http://localhost:3000") as api:
            with pytest.raises(AuthenticationError):
                await api.get_note(1)

        assert session.get_token() is None

    async def test__403__does_not_clear_token(
        self,
        mock_api: respx.MockRouter,
        api: NotesApiClient,
        session: SessionStore,
        unauthorized_calls: list[str],
    ) -> None:
        mock_api.get("/notes/1").mock(return_value=Response(403, json={"detail": "Forbidden"}))

        with pytest.raises(RequestValidationError):
            await api.get_note(1)

        assert session.get_token() == "test-token"
        assert unauthorized_calls == []

    async def test__shared_note_401__does_not_log_out(
        self,
        mock_api: respx.MockRouter,
        api: NotesApiClient,
        session: SessionStore,
        unauthorized_calls: list[str],
    ) -> None:
        mock_api.get("/s/revoked").mock(return_value=Response(401))

        with pytest.raises(AuthenticationError):
            await api.get_shared_note("revoked")

        assert session.get_token() == "test-token"
        assert unauthorized_calls == []


class TestFailures:
    """Tests for error translation."""

    async def test__network_failure__raises_network_error(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/notes").mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError):
            await api.list_notes()

    async def test__404__raises_not_found(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/notes/99").mock(return_value=Response(404, json={}))

        with pytest.raises(NotFoundError) as exc_info:
            await api.get_note(99)

        assert exc_info.value.message == "Not found"

    async def test__500__raises_server_error(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.post("/notes").mock(return_value=Response(500))

        with pytest.raises(ServerError) as exc_info:
            await api.create_note(NoteDraft(title="T"))

        assert exc_info.value.status_code == 500

    async def test__malformed_success_body__raises_server_error(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.get("/notes").mock(return_value=Response(200, json={"notes": []}))

        with pytest.raises(ServerError, match="Unexpected response"):
            await api.list_notes()


class TestOperations:
    """Tests for endpoint paths and payloads."""

    async def test__login__posts_credentials(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        route = mock_api.post("/auth/login").mock(
            return_value=Response(200, json={"accessToken": "new-token"}),
        )

        result = await api.login({"email": "a@example.com", "password": "pw"})

        assert result.access_token == "new-token"
        assert json.loads(route.calls[0].request.content) == {
            "email": "a@example.com",
            "password": "pw",
        }

    async def test__signup__posts_user_data(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        route = mock_api.post("/auth/signup").mock(return_value=Response(201, json={"ok": True}))

        await api.signup({"email": "a@example.com", "password": "pw", "name": "A"})

        assert route.called

    async def test__list_notes__query_params_serialized(
        self, mock_api: respx.MockRouter, api: NotesApiClient, note_json: Any,
    ) -> None:
        mock_api.get("/notes").mock(
            return_value=Response(200, json={"items": [note_json(1), note_json(2)]}),
        )

        notes = await api.list_notes({"pinned": True, "archived": False})

        assert [n.id for n in notes] == [1, 2]
        assert dict(mock_api.calls[0].request.url.params) == {
            "pinned": "true",
            "archived": "false",
        }

    async def test__create_note__sends_draft(
        self, mock_api: respx.MockRouter, api: NotesApiClient, note_json: Any,
    ) -> None:
        route = mock_api.post("/notes").mock(
            return_value=Response(201, json=note_json(5, title="T", tags=["x"])),
        )

        note = await api.create_note(NoteDraft(title="T", body="b", tags=["x"]))

        assert note.id == 5
        assert json.loads(route.calls[0].request.content) == {
            "title": "T",
            "body": "b",
            "tags": ["x"],
        }

    async def test__update_note__patches_set_fields(
        self, mock_api: respx.MockRouter, api: NotesApiClient, note_json: Any,
    ) -> None:
        route = mock_api.patch("/notes/5").mock(
            return_value=Response(200, json=note_json(5, title="New")),
        )

        note = await api.update_note(5, NoteUpdate(title="New"))

        assert note.title == "New"
        assert json.loads(route.calls[0].request.content) == {"title": "New"}

    @pytest.mark.parametrize(
        ("method_name", "path"),
        [
            ("pin", "/notes/4/pin"),
            ("unpin", "/notes/4/unpin"),
            ("archive", "/notes/4/archive"),
            ("unarchive", "/notes/4/unarchive"),
            ("create_share_link", "/s/note/4"),
        ],
    )
    async def test__post_actions__paths(
        self, mock_api: respx.MockRouter, api: NotesApiClient, method_name: str, path: str,
    ) -> None:
        route = mock_api.post(path).mock(
            return_value=Response(200, json={"url": "https://notes.example.com/s/abc"}),
        )

        await getattr(api, method_name)(4)

        assert route.called

    async def test__delete_operations__paths(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        note_route = mock_api.delete("/notes/4").mock(return_value=Response(204))
        share_route = mock_api.delete("/s/note/4").mock(return_value=Response(204))

        await api.delete_note(4)
        await api.delete_share_link(4)

        assert note_route.called
        assert share_route.called


class TestClientLifecycle:
    """Tests for ownership of the underlying httpx client."""

    async def test__injected_client__not_closed(
        self, mock_api: respx.MockRouter, session: SessionStore,
    ) -> None:
        async with httpx.AsyncClient(base_url="http://localhost:3000") as http_client:
            async with NotesApiClient(session, http_client=http_client):
                pass
            assert not http_client.is_closed

    async def test__owned_client__closed(self, session: SessionStore) -> None:
        api = NotesApiClient(session, base_url="http://localhost:3000")
        await api.aclose()
        assert api._client.is_closed


class TestPathSegments:
    """Tests for quoting ids and tokens placed in URL paths."""

    @pytest.mark.parametrize(
        ("share_token", "raw_path"),
        [
            ("abc123", b"/s/abc123"),
            ("../notes/5", b"/s/..%2Fnotes%2F5"),
            ("..", b"/s/%2E%2E"),
            ("a b?c", b"/s/a%20b%3Fc"),
        ],
    )
    async def test__get_shared_note__token_stays_in_one_segment(
        self, mock_api: respx.MockRouter, api: NotesApiClient, share_token: str, raw_path: bytes,
    ) -> None:
        mock_api.route(method="GET").mock(return_value=Response(200, json={"title": "Shared"}))

        await api.get_shared_note(share_token)

        assert mock_api.calls.last.request.url.raw_path == raw_path

    async def test__note_id__quoted(
        self, mock_api: respx.MockRouter, api: NotesApiClient,
    ) -> None:
        mock_api.route(method="DELETE").mock(return_value=Response(204))

        await api.delete_note("../s/note/1")

        assert mock_api.calls.last.request.url.raw_path == b"/notes/..%2Fs%2Fnote%2F1"
