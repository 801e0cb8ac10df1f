"""Donation center model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class DonationCenter(TypedDict):
    """donation_centers table row representation."""

    id: UUID
    name: str
    address: str | None
    phone: str | None
    email: str | None
    capacity_lbs: int | None
    open_hours: str | None
    accepted_fruits: list[str] | None
    created_at: datetime
