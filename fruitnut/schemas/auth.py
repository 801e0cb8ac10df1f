"""Authentication schemas for identities and sign in/up forms."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """The authenticated user handle issued by the auth provider."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID = Field(description="Auth user ID")
    email: str | None = Field(default=None, description="User's email address if available")


class SignInRequest(BaseModel):
    """Request schema for signing in with email and password."""

    email: str = Field(default="", description="User's email address")
    password: str = Field(default="", description="User's password")


class SignUpRequest(BaseModel):
    """Request schema for creating an account.

    Field rules are checked by the auth service so every problem is
    reported as an inline form message.
    """

    email: str = Field(default="", description="User's email address")
    password: str = Field(default="", description="User's password")
    confirm_password: str = Field(default="", description="Password confirmation")


class AuthResponse(BaseModel):
    """Response schema for sign in and sign up."""

    user_id: str | None = Field(default=None, description="Signed-in user ID, if a session was created")
    email: str = Field(description="User's email address")
    signed_in: bool = Field(description="Whether a session is now active")
    next_route: str = Field(description="Screen the client should show next")
    message: str | None = Field(default=None, description="Additional information for the user")
