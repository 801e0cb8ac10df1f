"""Donation and volunteer contribution schemas."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from fruitnut.models.donation import DonationStatus


class EditableDonationStatus(str, Enum):
    """Statuses a farmer may set directly; nullification has its own action."""

    PENDING = "pending"
    DELIVERED = "delivered"
    COMPLETED = "completed"


class DonationCreate(BaseModel):
    """Schema for logging a donation."""

    date: str = Field(..., min_length=1)
    fruit: str = Field(..., min_length=1)
    amount_picked_lbs: float = Field(default=0, ge=0)
    amount_donated_lbs: float = Field(default=0, ge=0)
    center_id: UUID | None = None
    volunteer_count: int = Field(default=0, ge=0)
    status: EditableDonationStatus = EditableDonationStatus.PENDING
    shift_id: UUID | None = None


class DonationUpdate(BaseModel):
    """Schema for editing a donation.

    All fields are optional for partial updates.
    """

    date: str | None = Field(default=None, min_length=1)
    fruit: str | None = Field(default=None, min_length=1)
    amount_picked_lbs: float | None = Field(default=None, ge=0)
    amount_donated_lbs: float | None = Field(default=None, ge=0)
    center_id: UUID | None = None
    volunteer_count: int | None = Field(default=None, ge=0)
    status: EditableDonationStatus | None = None
    shift_id: UUID | None = None


class NullifyRequest(BaseModel):
    """Request schema for nullifying a donation."""

    reason: str = Field(..., min_length=1, max_length=500, description="Why the donation is void")


class DonationResponse(BaseModel):
    """A donation as listed on the farmer and center screens."""

    id: UUID
    date: str
    fruit: str
    amount_picked_lbs: float = 0
    amount_donated_lbs: float = 0
    volunteer_count: int = 0
    status: DonationStatus
    center_id: UUID | None = None
    center_name: str | None = None
    farm_name: str | None = None
    shift_id: UUID | None = None
    shift_label: str | None = None
    nullification_reason: str | None = None


class Contribution(BaseModel):
    """A logged harvest contribution of a volunteer."""

    id: UUID
    date: str
    fruit: str
    farm_name: str
    center_name: str
    amount_picked_lbs: float
    amount_donated_lbs: float


class ContributionsResponse(BaseModel):
    """Volunteer contributions with totals."""

    contributions: list[Contribution]
    total_picked_lbs: float
    total_donated_lbs: float
