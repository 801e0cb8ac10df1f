"""Farm model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Farm(TypedDict):
    """farms table row representation."""

    id: UUID
    user_id: UUID | None
    name: str
    owner_name: str | None
    email: str | None
    phone: str | None
    address: str | None
    created_at: datetime
