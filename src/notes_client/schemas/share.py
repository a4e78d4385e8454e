"""Pydantic schemas for share links."""
from pydantic import BaseModel


class ShareLink(BaseModel):
    """Response body of POST /s/note/:id."""

    url: str
