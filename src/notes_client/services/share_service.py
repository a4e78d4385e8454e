"""Share links: a pass-through to the API client with no local cache."""
import logging

from notes_client.core.interfaces import Clipboard
from notes_client.schemas.note import NoteId, SharedNote
from notes_client.services.api_client import NotesApiClient

logger = logging.getLogger(__name__)


class ShareLinkService:
    """Create, fetch and revoke share links."""

    def __init__(self, api: NotesApiClient, clipboard: Clipboard | None = None) -> None:
        self.api = api
        self.clipboard = clipboard

    async def create_share_link(self, note_id: NoteId) -> str:
        """Return a shareable URL for a note."""
        link = await self.api.create_share_link(note_id)
        return link.url

    async def share(self, note_id: NoteId) -> str:
        """Create a share link and copy it to the clipboard, if one is configured."""
        url = await self.create_share_link(note_id)
        if self.clipboard is not None:
            self.clipboard.write_text(url)
        return url

    async def get_shared_note(self, share_token: str) -> SharedNote:
        """Fetch the read-only projection behind a share token. No login needed."""
        return await self.api.get_shared_note(share_token)

    async def delete_share_link(self, note_id: NoteId) -> None:
        """Revoke the share link for a note."""
        await self.api.delete_share_link(note_id)
        logger.debug("Share link for note %s revoked", note_id)
