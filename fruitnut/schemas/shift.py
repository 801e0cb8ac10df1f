"""Harvest shift and signup schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from fruitnut.models.shift import ShiftStatus


class ShiftCreate(BaseModel):
    """Schema for scheduling a harvest shift."""

    date: str = Field(..., min_length=1, description="Shift date")
    time: str = Field(..., min_length=1, description="Shift time window")
    fruit: str = Field(..., min_length=1, description="Fruit to harvest")
    volunteer_limit: int | None = Field(default=None, ge=1, description="Maximum number of volunteers")
    status: ShiftStatus = Field(default=ShiftStatus.ACTIVE, description="Shift status")
    center_id: UUID | None = Field(default=None, description="Center receiving the harvest")


class ShiftUpdate(BaseModel):
    """Schema for editing a shift.

    All fields are optional for partial updates.
    """

    date: str | None = Field(default=None, min_length=1)
    time: str | None = Field(default=None, min_length=1)
    fruit: str | None = Field(default=None, min_length=1)
    volunteer_limit: int | None = Field(default=None, ge=1)
    status: ShiftStatus | None = None
    center_id: UUID | None = None


class ShiftResponse(BaseModel):
    """A shift as listed on the farmer and volunteer shift screens."""

    id: UUID
    date: str
    time: str
    fruit: str
    volunteer_limit: int
    signed_up: int = Field(default=0, description="Number of volunteers signed up")
    status: ShiftStatus
    center_id: UUID | None = None
    center_name: str | None = None
    farm_name: str | None = None


class SignupDetail(BaseModel):
    """A volunteer signup on a shift."""

    id: UUID
    volunteer_name: str
    amount_picked_lbs: float = 0
    amount_donated_lbs: float = 0
    logged_donation: bool = False


class ShiftSignupsResponse(BaseModel):
    """Signups of one shift with harvest totals."""

    signups: list[SignupDetail]
    total_picked_lbs: float
    total_donated_lbs: float


class ShiftSignupResponse(BaseModel):
    """Confirmation of a volunteer signup."""

    shift_id: UUID
    volunteer_name: str
    shift_full: bool = Field(description="Whether the signup filled the shift")
    message: str
