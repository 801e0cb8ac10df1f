"""User profile model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class UserProfile(TypedDict):
    """user_profiles table row representation.

    One row per role the user has set up. Role-specific columns are
    null for the other roles.
    """

    id: UUID
    user_id: UUID
    role: str
    farm_id: UUID | None
    center_id: UUID | None
    volunteer_name: str | None
    phone: str | None
    waiver_agreed: bool | None
    waiver_agreed_at: datetime | None
    created_at: datetime


class UserProfileCreate(TypedDict, total=False):
    """Data required to create a new profile.

    user_id and role are required; the linkage column depends on the role.
    """

    user_id: str
    role: str
    farm_id: str
    center_id: str
    volunteer_name: str
    phone: str | None
