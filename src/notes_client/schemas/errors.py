"""
Typed schema for error response bodies.

The notes API reports errors in a few shapes:

    {"error": {"message": "...", "code": "..."}}
    {"detail": "..."} / {"detail": {"message": "..."}} / {"detail": [{"loc": [...], "msg": "..."}]}
    {"message": "..."}

`ErrorResponse.extract_message()` resolves them in that order and returns None when
no usable text is present, so callers can apply their own fallback.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorBody(BaseModel):
    """Nested error object."""

    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    code: str | None = None


class ErrorResponse(BaseModel):
    """Error response body."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorBody | None = None
    detail: str | dict[str, Any] | list[Any] | None = None
    message: str | None = None

    def extract_message(self) -> str | None:
        """Return the most specific human-readable message, or None."""
        if self.error is not None and self.error.message:
            return self.error.message
        detail_message = _detail_message(self.detail)
        if detail_message:
            return detail_message
        return self.message or None


def _detail_message(detail: str | dict[str, Any] | list[Any] | None) -> str | None:
    if isinstance(detail, str):
        return detail or None
    if isinstance(detail, dict):
        message = detail.get("message")
        return message if isinstance(message, str) and message else None
    if isinstance(detail, list):
        # FastAPI validation errors return a list of error objects
        messages = []
        for err in detail:
            if isinstance(err, dict):
                loc = err.get("loc") or ["unknown"]
                msg = err.get("msg", "invalid")
                messages.append(f"{loc[-1]}: {msg}")
        return "; ".join(messages) or None
    return None
