"""Role setup form schemas."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from fruitnut.schemas.center import CenterSummary
from fruitnut.schemas.profile import Profile, Role


class CenterSetupMode(str, Enum):
    """How a center profile is linked to a donation center."""

    JOIN = "join"
    CREATE = "create"


class FarmerSetup(BaseModel):
    """Farmer details entered during role setup."""

    farm_name: str = Field(default="", max_length=255, description="Name of the farm (required)")
    owner_name: str = Field(default="", max_length=255, description="Farm owner's name")


class VolunteerSetup(BaseModel):
    """Volunteer details entered during role setup."""

    volunteer_name: str = Field(default="", max_length=255, description="Volunteer display name (required)")
    phone: str = Field(default="", max_length=50, description="Optional phone number")


class CenterSetup(BaseModel):
    """Donation center details entered during role setup."""

    mode: CenterSetupMode = Field(default=CenterSetupMode.JOIN, description="Join an existing center or create one")
    center_id: UUID | None = Field(default=None, description="Existing center to join")
    name: str = Field(default="", max_length=255, description="New center name (required when creating)")
    address: str = Field(default="", description="New center address")
    phone: str = Field(default="", description="New center phone")
    email: str = Field(default="", description="New center email")


class RoleSetupRequest(BaseModel):
    """Request schema for completing role setup.

    Only the sections of the selected roles are read.
    """

    roles: list[Role] = Field(default_factory=list, description="Roles to set up")
    farmer: FarmerSetup = Field(default_factory=FarmerSetup)
    volunteer: VolunteerSetup = Field(default_factory=VolunteerSetup)
    center: CenterSetup = Field(default_factory=CenterSetup)


class RoleSetupResponse(BaseModel):
    """Response schema for completed role setup."""

    created: list[Profile] = Field(description="Profiles created by this setup")
    next_route: str = Field(description="Screen the client should show next")


class RoleSetupOptions(BaseModel):
    """Choices shown on the role setup screen."""

    centers: list[CenterSummary] = Field(default_factory=list, description="Centers a center profile can join")
    existing_roles: list[Role] = Field(default_factory=list, description="Roles the user already has")
