"""Client-side narrowing of the cached notes by a free-text query."""
from collections.abc import Sequence

from notes_client.schemas.note import Note


def note_matches(note: Note, query: str) -> bool:
    """True if the query is a case-insensitive substring of title, body or any tag."""
    needle = query.lower()
    return (
        needle in note.title.lower()
        or needle in note.body.lower()
        or any(needle in tag.lower() for tag in note.tags)
    )


def search_notes(notes: Sequence[Note], query: str) -> list[Note]:
    """
    Return the notes matching the query, preserving order.

    An empty query returns every note. Never fetches: this only narrows what the
    server already returned for the active filter.
    """
    if not query:
        return list(notes)
    return [note for note in notes if note_matches(note, query)]
