"""
Create/edit buffer for one note at a time.

A new-note draft and an edit draft are mutually exclusive: opening either one
discards whatever was open before.
"""
import logging
from typing import Literal

from notes_client.schemas.note import Note, NoteDraft, NoteId
from notes_client.schemas.validators import normalize_tag
from notes_client.services.exceptions import DraftValidationError
from notes_client.services.note_cache import NoteCache

logger = logging.getLogger(__name__)

DraftMode = Literal["create", "edit"]


class DraftEditor:
    """Holds the open draft, if any, and its tag set."""

    def __init__(self) -> None:
        self.mode: DraftMode | None = None
        self.editing_id: NoteId | None = None
        self.draft: NoteDraft | None = None

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    def open_new(self) -> NoteDraft:
        """Start an empty new-note draft, closing any edit in progress."""
        self.mode = "create"
        self.editing_id = None
        self.draft = NoteDraft()
        return self.draft

    def open_edit(self, note: Note) -> NoteDraft:
        """Start editing a copy of an existing note, closing any new-note draft."""
        self.mode = "edit"
        self.editing_id = note.id
        self.draft = NoteDraft.from_note(note)
        return self.draft

    def cancel(self) -> None:
        """Discard the draft. Nothing is sent."""
        self.mode = None
        self.editing_id = None
        self.draft = None

    def _require_draft(self) -> NoteDraft:
        if self.draft is None:
            raise DraftValidationError("No draft is open")
        return self.draft

    def set_title(self, title: str) -> None:
        self._require_draft().title = title

    def set_body(self, body: str) -> None:
        self._require_draft().body = body

    def add_tag(self, text: str) -> bool:
        """
        Append a tag to the draft.

        Input is trimmed. Empty or whitespace-only input and exact (case-sensitive)
        duplicates are ignored.

        Returns:
            True if the tag was added.
        """
        draft = self._require_draft()
        tag = normalize_tag(text)
        if tag is None or tag in draft.tags:
            return False
        draft.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> bool:
        """Remove a tag by exact match. Returns True if it was present."""
        draft = self._require_draft()
        if tag not in draft.tags:
            return False
        draft.tags.remove(tag)
        return True

    async def submit(self, cache: NoteCache) -> Note:
        """
        Create or update through the cache, then close the draft.

        The draft stays open if validation or the request fails.
        """
        draft = self._require_draft()
        if self.mode == "edit":
            note = await cache.update(self.editing_id, draft)
        else:
            note = await cache.create(draft)
        logger.debug("Draft submitted as note %s", note.id)
        self.cancel()
        return note
