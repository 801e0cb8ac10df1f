"""App session schemas for the /session endpoints."""

from uuid import UUID

from pydantic import BaseModel, Field

from fruitnut.schemas.auth import Identity
from fruitnut.schemas.profile import Profile


class SessionSnapshot(BaseModel):
    """Read-only view of the app session state."""

    phase: str = Field(description="Navigation phase derived from the session state")
    is_loading: bool = Field(description="Whether the session or its profiles are still loading")
    identity: Identity | None = Field(default=None, description="Signed-in identity, if any")
    profiles: list[Profile] = Field(default_factory=list, description="Role profiles of the identity")
    active_profile: Profile | None = Field(default=None, description="Currently selected profile")
    profile_load_status: str = Field(description="Status of the last profile load")
    profile_load_error: str | None = Field(default=None, description="Error of the last failed profile load")
    route: str = Field(description="Screen the app is currently on")


class SelectProfileRequest(BaseModel):
    """Request schema for choosing the active profile on the role picker."""

    profile_id: UUID = Field(..., description="ID of one of the signed-in user's profiles")


class RolePickerResponse(BaseModel):
    """Profiles offered on the role picker."""

    profiles: list[Profile] = Field(description="Profiles the user can switch into")
