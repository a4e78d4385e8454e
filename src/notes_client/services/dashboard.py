"""
User-action layer over the note cache.

Each action runs the state operation and reports the outcome through the notifier:
the server-provided detail when there is one, else a per-action fallback message.
Actions return a success flag instead of raising, so callers only drive the UI.
"""
import logging
from typing import Any

from notes_client.core.interfaces import Clipboard, ConfirmPrompt, Notifier
from notes_client.schemas.auth import Credentials, SignupData
from notes_client.schemas.note import Note, NoteId
from notes_client.services.api_client import NotesApiClient
from notes_client.services.auth_service import AuthService
from notes_client.services.draft_editor import DraftEditor
from notes_client.services.exceptions import DraftValidationError
from notes_client.services.note_cache import FilterMode, NoteCache
from notes_client.services.share_service import ShareLinkService
from notes_client.shared.api_errors import ApiError

logger = logging.getLogger(__name__)


def _error_message(e: ApiError, fallback: str) -> str:
    return e.detail or fallback


class Dashboard:
    """Note list, filter, search box and draft editor for one signed-in user."""

    def __init__(
        self,
        api: NotesApiClient,
        notifier: Notifier,
        confirm: ConfirmPrompt,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.notifier = notifier
        self.confirm = confirm
        self.auth = AuthService(api)
        self.cache = NoteCache(api)
        self.editor = DraftEditor()
        self.shares = ShareLinkService(api, clipboard)
        self.search_query = ""
        self.loading = False

    @property
    def filter_mode(self) -> FilterMode:
        return self.cache.mode

    @property
    def visible_notes(self) -> list[Note]:
        """Cached notes narrowed by the current search query."""
        return self.cache.visible(self.search_query)

    def set_search(self, query: str) -> list[Note]:
        """Change the search query. Never fetches."""
        self.search_query = query
        return self.visible_notes

    async def set_filter(self, mode: FilterMode) -> bool:
        """Switch filter mode and load its notes."""
        return await self.load(FilterMode(mode))

    async def load(self, mode: FilterMode | None = None) -> bool:
        """Refresh the note list for the current (or given) filter."""
        self.loading = True
        try:
            await self.cache.refresh(mode)
        except ApiError as e:
            logger.info("Fetching notes failed: %s", e.message)
            self.notifier.error(_error_message(e, "Failed to fetch notes"))
            return False
        finally:
            self.loading = False
        return True

    async def login(self, credentials: Credentials | dict[str, Any]) -> bool:
        try:
            await self.auth.login(credentials)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Login failed"))
            return False
        return True

    async def signup(self, user_data: SignupData | dict[str, Any]) -> bool:
        try:
            await self.auth.signup(user_data)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Signup failed"))
            return False
        return True

    def logout(self) -> None:
        self.auth.logout()
        self.editor.cancel()

    async def submit_draft(self) -> bool:
        """Save the open draft as a new note or as an edit."""
        editing = self.editor.mode == "edit"
        try:
            await self.editor.submit(self.cache)
        except DraftValidationError as e:
            self.notifier.error(e.message)
            return False
        except ApiError as e:
            fallback = "Failed to update note" if editing else "Failed to create note"
            self.notifier.error(_error_message(e, fallback))
            return False
        self.notifier.success(
            "Note updated successfully" if editing else "Note created successfully",
        )
        return True

    async def delete_note(self, note_id: NoteId) -> bool:
        try:
            deleted = await self.cache.remove(note_id, self.confirm)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Failed to delete note"))
            return False
        if deleted:
            self.notifier.success("Note deleted successfully")
        return deleted

    async def toggle_pin(self, note_id: NoteId, pinned: bool) -> bool:
        try:
            await self.cache.toggle_pin(note_id, pinned, refresh=False)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Failed to update note"))
            return False
        self.notifier.success("Note unpinned" if pinned else "Note pinned")
        # A failed reload is reported on its own; the mutation already applied
        await self.load()
        return True

    async def toggle_archive(self, note_id: NoteId, archived: bool) -> bool:
        try:
            await self.cache.toggle_archive(note_id, archived, refresh=False)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Failed to update note"))
            return False
        self.notifier.success("Note unarchived" if archived else "Note archived")
        await self.load()
        return True

    async def share_note(self, note_id: NoteId) -> str | None:
        """Create a share link and copy it. Returns the URL, or None on failure."""
        try:
            url = await self.shares.share(note_id)
        except ApiError as e:
            self.notifier.error(_error_message(e, "Failed to create share link"))
            return None
        self.notifier.success("Share link copied to clipboard!")
        return url
