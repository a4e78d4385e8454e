"""
API error parsing and the client exception hierarchy.

Every failed request is parsed into a semantic category and raised as the matching
`ApiError` subclass. The message comes from the response body when the server
provided one, else a generic fallback for the category.
"""
from dataclasses import dataclass
from typing import Literal

import httpx
from pydantic import ValidationError

from notes_client.schemas.errors import ErrorResponse

ErrorCategory = Literal[
    "auth",        # 401 - Missing, invalid or expired token
    "not_found",   # 404 - Resource not found
    "validation",  # other 4xx - Request rejected
    "server",      # 5xx - Server failure
    "network",     # No response received
]

FALLBACK_MESSAGES: dict[ErrorCategory, str] = {
    "auth": "Invalid or expired token",
    "not_found": "Not found",
    "validation": "Request rejected",
    "server": "Server error",
    "network": "API unavailable",
}


class NotesClientError(Exception):
    """Base class for every error raised by the notes client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ApiError(NotesClientError):
    """
    A request to the notes API failed.

    Attributes:
        message: Human-readable message, always set.
        detail: The server-provided message, or None if the body had none.
        status_code: HTTP status, or None for network failures.
        category: Semantic error category.
    """

    category: ErrorCategory = "server"

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(ApiError):
    """401 - the session was rejected and has been torn down."""

    category: ErrorCategory = "auth"


class RequestValidationError(ApiError):
    """4xx other than 401 - the server rejected the request."""

    category: ErrorCategory = "validation"


class NotFoundError(RequestValidationError):
    """404 - the resource does not exist."""

    category: ErrorCategory = "not_found"


class ServerError(ApiError):
    """5xx - the server failed."""

    category: ErrorCategory = "server"


class NetworkError(ApiError):
    """No response was received."""

    category: ErrorCategory = "network"


_ERROR_CLASSES: dict[ErrorCategory, type[ApiError]] = {
    "auth": AuthenticationError,
    "not_found": NotFoundError,
    "validation": RequestValidationError,
    "server": ServerError,
    "network": NetworkError,
}


@dataclass
class ParsedApiError:
    """Parsed API error with semantic category and message."""

    category: ErrorCategory
    message: str
    detail: str | None = None
    status_code: int | None = None

    def to_exception(self) -> ApiError:
        """Build the exception matching the category."""
        return _ERROR_CLASSES[self.category](
            self.message,
            detail=self.detail,
            status_code=self.status_code,
        )


def categorize_status(status: int) -> ErrorCategory:
    """Map an HTTP error status to a category."""
    if status == 401:
        return "auth"
    if status == 404:
        return "not_found"
    if 400 <= status < 500:
        return "validation"
    return "server"


def extract_error_message(response: httpx.Response) -> str | None:
    """Extract the server-provided message from an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    try:
        return ErrorResponse.model_validate(body).extract_message()
    except ValidationError:
        return None


def parse_http_error(response: httpx.Response) -> ParsedApiError:
    """
    Parse an error response into a semantic category.

    Args:
        response: A response with a 4xx or 5xx status.

    Returns:
        ParsedApiError with category, message and the raw server detail.
    """
    status = response.status_code
    category = categorize_status(status)
    detail = extract_error_message(response)
    message = detail or FALLBACK_MESSAGES[category]
    if category == "server" and not detail:
        message = f"{message} ({status})"
    return ParsedApiError(category, message, detail=detail, status_code=status)


def raise_for_response(response: httpx.Response) -> None:
    """Raise the matching ApiError if the response is an error."""
    if response.is_error:
        raise parse_http_error(response).to_exception()


def network_error(e: httpx.RequestError) -> NetworkError:
    """Translate an httpx transport error."""
    return NetworkError(f"{FALLBACK_MESSAGES['network']}: {e}")
