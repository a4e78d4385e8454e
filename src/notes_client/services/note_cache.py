"""
Local copy of the notes visible under the active filter, and the mutation protocol.

The cache is mutated only by results of successful API calls:

- refresh replaces the whole list with the server's response, in server order.
- create prepends the returned note.
- update replaces the single matching entry with the server's representation.
- remove drops the entry by id.
- pin/archive toggles never flip flags locally. They trigger a full refresh so the
  server's view rules decide what stays visible.

A failed call leaves the cache unchanged. Concurrent actions are not serialized: a
refresh that completes after a later delete overwrites the delete's local effect.
"""
import logging
from enum import StrEnum
from typing import Any

from notes_client.core.interfaces import ConfirmPrompt
from notes_client.schemas.note import Note, NoteDraft, NoteId, NoteUpdate
from notes_client.services.api_client import NotesApiClient
from notes_client.services.exceptions import DraftValidationError
from notes_client.services.note_search import search_notes

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this note?"


class FilterMode(StrEnum):
    """Server-backed view selector."""

    ALL = "all"
    PINNED = "pinned"
    ARCHIVED = "archived"


def filter_params(mode: FilterMode) -> dict[str, Any]:
    """Translate a filter mode into GET /notes query parameters."""
    if mode == FilterMode.PINNED:
        return {"pinned": True, "archived": False}
    if mode == FilterMode.ARCHIVED:
        return {"archived": True}
    # ALL explicitly excludes archived notes
    return {"archived": False}


class NoteCache:
    """Single source of truth for the notes visible under the current filter."""

    def __init__(self, api: NotesApiClient, mode: FilterMode = FilterMode.ALL) -> None:
        self.api = api
        self.mode = mode
        self._notes: list[Note] = []

    @property
    def notes(self) -> list[Note]:
        """Copy of the cached notes in server order."""
        return list(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return any(note.id == note_id for note in self._notes)

    def get(self, note_id: NoteId) -> Note | None:
        """Return the cached note with this id, if present."""
        return next((note for note in self._notes if note.id == note_id), None)

    def visible(self, query: str = "") -> list[Note]:
        """Cached notes narrowed by a free-text query."""
        return search_notes(self._notes, query)

    async def refresh(self, mode: FilterMode | None = None) -> list[Note]:
        """
        Fetch the notes for a filter mode and replace the cache with them.

        Args:
            mode: Filter mode to switch to. Defaults to the current mode.

        Returns:
            The new cache contents.
        """
        if mode is not None:
            self.mode = FilterMode(mode)
        notes = await self.api.list_notes(filter_params(self.mode))
        self._notes = notes
        logger.debug("Refreshed %d notes for filter %s", len(notes), self.mode)
        return self.notes

    async def create(self, draft: NoteDraft) -> Note:
        """
        Create a note and prepend it to the cache.

        Raises:
            DraftValidationError: If the title is empty. No request is sent.
            ApiError: If the request fails. The cache is unchanged.
        """
        try:
            draft.validated()
        except ValueError as e:
            raise DraftValidationError(str(e)) from e
        note = await self.api.create_note(draft)
        self._notes = [note, *self._notes]
        return note

    async def update(self, note_id: NoteId, patch: NoteUpdate | NoteDraft) -> Note:
        """
        Update a note and replace its cache entry with the server's copy.

        Raises:
            DraftValidationError: If the title is empty. No request is sent.
            ApiError: If the request fails. The cache is unchanged.
        """
        try:
            patch.validated()
        except ValueError as e:
            raise DraftValidationError(str(e)) from e
        updated = await self.api.update_note(note_id, patch)
        self._notes = [updated if note.id == note_id else note for note in self._notes]
        return updated

    async def remove(self, note_id: NoteId, confirm: ConfirmPrompt) -> bool:
        """
        Delete a note after the user confirms, and drop it from the cache.

        Returns:
            False if the user declined (nothing is sent), True once deleted.
        """
        if not confirm(DELETE_CONFIRMATION):
            logger.debug("Delete of note %s cancelled", note_id)
            return False
        await self.api.delete_note(note_id)
        self._notes = [note for note in self._notes if note.id != note_id]
        return True

    async def toggle_pin(
        self, note_id: NoteId, currently_pinned: bool, *, refresh: bool = True,
    ) -> list[Note]:
        """
        Pin or unpin a note, then refresh the current filter.

        Args:
            refresh: Pass False when the caller runs the refresh itself, to tell a
                failed mutation apart from a failed reload.
        """
        if currently_pinned:
            await self.api.unpin(note_id)
        else:
            await self.api.pin(note_id)
        if not refresh:
            return self.notes
        return await self.refresh()

    async def toggle_archive(
        self, note_id: NoteId, currently_archived: bool, *, refresh: bool = True,
    ) -> list[Note]:
        """Archive or unarchive a note, then refresh the current filter."""
        if currently_archived:
            await self.api.unarchive(note_id)
        else:
            await self.api.archive(note_id)
        if not refresh:
            return self.notes
        return await self.refresh()
