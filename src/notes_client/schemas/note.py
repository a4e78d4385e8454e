"""Pydantic schemas for notes as exchanged with the notes API."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from notes_client.schemas.validators import check_title_not_empty, dedupe_tags
from notes_client.shared.formatting import format_timestamp

NoteId = int | str


class _WireModel(BaseModel):
    """Base for models using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Note(_WireModel):
    """A note as returned by the server."""

    id: NoteId
    title: str
    body: str = ""
    tags: list[str] = Field(default_factory=list)
    pinned: bool = False
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("body", mode="before")
    @classmethod
    def null_body_to_empty(cls, v: str | None) -> str:
        """The server may send null for an empty body."""
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_to_empty(cls, v: list[str] | None) -> list[str]:
        """The server may send null for an untagged note."""
        return [] if v is None else v

    @property
    def is_archived(self) -> bool:
        """A note is archived iff archived_at is set."""
        return self.archived_at is not None

    @property
    def created_display(self) -> str:
        return format_timestamp(self.created_at)

    @property
    def updated_display(self) -> str:
        return format_timestamp(self.updated_at)


class SharedNote(_WireModel):
    """
    Read-only projection of a note served through a share link.

    The server decides which fields are exposed, so everything except the title is
    optional.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: NoteId | None = None
    title: str
    body: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("body", mode="before")
    @classmethod
    def null_body_to_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_to_empty(cls, v: list[str] | None) -> list[str]:
        return [] if v is None else v


class NoteDraft(BaseModel):
    """
    Schema for creating a note, and the buffer behind the draft editor.

    The title is not validated on construction because an open draft may hold an
    empty title while the user types. Call `validated()` before sending.
    """

    title: str = ""
    body: str = ""
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Drop blank and duplicate tags."""
        return dedupe_tags(v)

    @classmethod
    def from_note(cls, note: Note) -> "NoteDraft":
        """Copy the editable fields of an existing note."""
        return cls(title=note.title, body=note.body, tags=list(note.tags))

    def validated(self) -> "NoteDraft":
        """
        Return self if the draft can be submitted.

        Raises:
            ValueError: If the title is empty or whitespace-only.
        """
        check_title_not_empty(self.title)
        return self

    def to_payload(self) -> dict[str, Any]:
        """Request body for POST /notes and PATCH /notes/:id."""
        return {"title": self.title, "body": self.body, "tags": list(self.tags)}


class NoteUpdate(BaseModel):
    """Schema for a partial note update. Unset fields are not sent."""

    title: str | None = None
    body: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        """Drop blank and duplicate tags if provided."""
        if v is None:
            return None
        return dedupe_tags(v)

    def validated(self) -> "NoteUpdate":
        """
        Return self if the patch can be sent.

        Raises:
            ValueError: If a title is present and empty or whitespace-only.
        """
        if "title" in self.model_fields_set:
            check_title_not_empty(self.title)
        return self

    def to_payload(self) -> dict[str, Any]:
        """Request body containing only the fields that were set."""
        return self.model_dump(exclude_unset=True)


class NoteListResponse(BaseModel):
    """Response body of GET /notes."""

    items: list[Note]
