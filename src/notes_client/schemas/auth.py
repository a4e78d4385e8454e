"""Pydantic schemas for login and signup."""
from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Login request body."""

    model_config = ConfigDict(extra="allow")

    email: str
    password: str


class SignupData(BaseModel):
    """
    Signup request body.

    Extra fields are forwarded untouched so the server can ask for more than an
    email and password.
    """

    model_config = ConfigDict(extra="allow")

    email: str
    password: str
    name: str | None = None


class LoginResponse(BaseModel):
    """Response body of POST /auth/login."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(validation_alias="accessToken", min_length=1)
