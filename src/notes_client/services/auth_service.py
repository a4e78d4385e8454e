"""Login, signup and logout on top of the API client and session store."""
import logging
from typing import Any

from notes_client.schemas.auth import Credentials, SignupData
from notes_client.services.api_client import NotesApiClient

logger = logging.getLogger(__name__)


class AuthService:
    """
    Explicit session transitions.

    A token found in the session store at start-up authenticates immediately; it is
    only discovered to be invalid when the server rejects a request.
    """

    def __init__(self, api: NotesApiClient) -> None:
        self.api = api
        self.session = api.session

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    async def login(self, credentials: Credentials | dict[str, Any]) -> str:
        """
        Log in and persist the returned token.

        Returns:
            The access token.

        Raises:
            ApiError: If the server rejects the credentials or is unreachable.
        """
        response = await self.api.login(credentials)
        self.session.set_token(response.access_token)
        logger.info("Logged in")
        return response.access_token

    async def signup(self, user_data: SignupData | dict[str, Any]) -> None:
        """Create an account. Does not log in."""
        await self.api.signup(user_data)
        logger.info("Signed up")

    def logout(self) -> None:
        """Clear the local session. No request is sent."""
        self.session.clear_token()
        logger.info("Logged out")
