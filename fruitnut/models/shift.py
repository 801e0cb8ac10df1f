"""Harvest shift model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict
from uuid import UUID


class ShiftStatus(str, Enum):
    """Status values for a harvest shift."""

    ACTIVE = "active"
    FULL = "full"
    CANCELLED = "cancelled"


class Shift(TypedDict):
    """shifts table row representation."""

    id: UUID
    farm_id: UUID
    center_id: UUID | None
    date: str
    time: str
    fruit: str
    volunteer_limit: int
    status: str
    created_at: datetime


class ShiftSignup(TypedDict):
    """shift_signups table row representation.

    Volunteers are identified by their volunteer name, matching the
    name stored on their volunteer profile.
    """

    id: UUID
    shift_id: UUID
    volunteer_name: str
    amount_picked_lbs: float | None
    amount_donated_lbs: float | None
    logged_donation: bool
    created_at: datetime
