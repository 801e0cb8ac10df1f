"""Role profile schemas."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """The closed set of roles a user can adopt."""

    FARMER = "farmer"
    VOLUNTEER = "volunteer"
    CENTER = "center"


class Profile(BaseModel):
    """A role assignment owned by an identity.

    Immutable once loaded; the registry replaces profiles wholesale on
    every load instead of editing them.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID = Field(description="Profile unique identifier")
    user_id: UUID = Field(description="Owning auth user ID")
    role: Role = Field(description="Role this profile grants")
    farm_id: UUID | None = Field(default=None, description="Linked farm (farmer profiles)")
    center_id: UUID | None = Field(default=None, description="Linked donation center (center profiles)")
    volunteer_name: str | None = Field(default=None, description="Volunteer display name (volunteer profiles)")
    phone: str | None = Field(default=None, description="Volunteer phone number")
    waiver_agreed: bool = Field(default=False, description="Whether the volunteer waiver has been signed")
    waiver_agreed_at: datetime | None = Field(default=None, description="When the waiver was signed")
    created_at: datetime | None = Field(default=None, description="Profile creation timestamp")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        """Build a profile from a user_profiles row, ignoring extra columns."""
        data = {key: row.get(key) for key in cls.model_fields if key in row}
        if data.get("waiver_agreed") is None:
            data.pop("waiver_agreed", None)
        return cls(**data)


class VolunteerProfileUpdate(BaseModel):
    """Editable fields of a volunteer profile."""

    volunteer_name: str = Field(..., min_length=1, max_length=255, description="Volunteer display name")
    phone: str | None = Field(default=None, max_length=50, description="Phone number, blank to clear")


class WaiverSignRequest(BaseModel):
    """Request schema for signing the volunteer waiver."""

    agreed: bool = Field(..., description="Must be true to sign the waiver")
