"""Donation model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict
from uuid import UUID


class DonationStatus(str, Enum):
    """Lifecycle status of a donation.

    A nullified donation is kept for the record but excluded from center
    reports and can no longer be edited.
    """

    PENDING = "pending"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    NULLIFIED = "nullified"


class Donation(TypedDict):
    """donations table row representation."""

    id: UUID
    farm_id: UUID
    center_id: UUID | None
    shift_id: UUID | None
    date: str
    fruit: str
    amount_picked_lbs: float
    amount_donated_lbs: float
    volunteer_count: int
    status: str
    nullification_reason: str | None
    created_at: datetime
