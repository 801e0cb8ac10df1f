"""Harvest shift business logic service."""

import logging
from typing import Any
from uuid import UUID

from fruitnut.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from fruitnut.core.config import get_settings
from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.shift import Shift, ShiftStatus
from fruitnut.schemas.shift import (
    ShiftCreate,
    ShiftResponse,
    ShiftSignupResponse,
    ShiftSignupsResponse,
    ShiftUpdate,
    SignupDetail,
)

logger = logging.getLogger(__name__)

# Statuses volunteers can see on the open shifts screen
LISTED_STATUSES = [ShiftStatus.ACTIVE.value, ShiftStatus.FULL.value]


def _embedded_name(row: dict[str, Any], table: str) -> str | None:
    """Read the name of an embedded (joined) row, if any."""
    embedded = row.get(table)
    if isinstance(embedded, list):
        embedded = embedded[0] if embedded else None
    return embedded.get("name") if embedded else None


def _signup_count(row: dict[str, Any]) -> int:
    signups = row.get("shift_signups") or []
    return signups[0].get("count", 0) if signups else 0


def _to_response(row: dict[str, Any]) -> ShiftResponse:
    return ShiftResponse(
        id=row["id"],
        date=row["date"],
        time=row["time"],
        fruit=row["fruit"],
        volunteer_limit=row["volunteer_limit"],
        signed_up=_signup_count(row),
        status=row["status"],
        center_id=row.get("center_id"),
        center_name=_embedded_name(row, "donation_centers"),
        farm_name=_embedded_name(row, "farms"),
    )


class ShiftService:
    """Service for scheduling harvest shifts and volunteer signups."""

    def __init__(self) -> None:
        """Initialize shift service with Supabase client."""
        self.client = get_supabase_client()
        self.settings = get_settings()

    async def list_farm_shifts(self, farm_id: UUID) -> list[ShiftResponse]:
        """Get the shifts of a farm, newest first.

        Args:
            farm_id: The farm's UUID.

        Returns:
            list[ShiftResponse]: Shifts with signup counts and center names.
        """
        response = (
            self.client.table("shifts")
            .select("*, shift_signups(count), donation_centers(name)")
            .eq("farm_id", str(farm_id))
            .order("created_at", desc=True)
            .execute()
        )

        return [_to_response(row) for row in response.data or []]

    async def list_open_shifts(self) -> list[ShiftResponse]:
        """Get the shifts volunteers can browse (active and full)."""
        response = (
            self.client.table("shifts")
            .select("*, shift_signups(count), farms(name), donation_centers(name)")
            .in_("status", LISTED_STATUSES)
            .order("date")
            .execute()
        )

        return [_to_response(row) for row in response.data or []]

    async def get_shift(self, shift_id: UUID, farm_id: UUID | None = None) -> Shift:
        """Get a shift by ID, optionally scoped to a farm.

        Raises:
            NotFoundError: If the shift does not exist (or belongs to another farm).
        """
        query = self.client.table("shifts").select("*").eq("id", str(shift_id))
        if farm_id is not None:
            query = query.eq("farm_id", str(farm_id))

        response = query.maybe_single().execute()

        if not response or not response.data:
            raise NotFoundError("Shift not found")

        return response.data

    async def create_shift(self, farm_id: UUID, data: ShiftCreate) -> Shift:
        """Schedule a new shift for a farm.

        Args:
            farm_id: The farm's UUID.
            data: Shift details. A missing volunteer limit uses the configured default.

        Returns:
            Shift: The created shift.
        """
        insert_data = {
            "farm_id": str(farm_id),
            "date": data.date.strip(),
            "time": data.time.strip(),
            "fruit": data.fruit.strip(),
            "volunteer_limit": data.volunteer_limit or self.settings.volunteer_limit_default,
            "status": data.status.value,
            "center_id": str(data.center_id) if data.center_id else None,
        }

        response = (
            self.client.table("shifts")
            .insert(insert_data)
            .execute()
        )

        if not response.data:
            raise ValidationError("Failed to create shift. Please try again.")

        shift = response.data[0]
        logger.info("Created shift %s for farm %s", shift["id"], farm_id)
        return shift

    async def update_shift(self, farm_id: UUID, shift_id: UUID, data: ShiftUpdate) -> Shift:
        """Edit a shift of a farm.

        Raises:
            NotFoundError: If the shift does not belong to the farm.
        """
        update_data = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")

        if not update_data:
            return await self.get_shift(shift_id, farm_id)

        response = (
            self.client.table("shifts")
            .update(update_data)
            .eq("id", str(shift_id))
            .eq("farm_id", str(farm_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Shift not found")

        return response.data[0]

    async def delete_shift(self, farm_id: UUID, shift_id: UUID) -> None:
        """Delete a shift of a farm.

        Raises:
            NotFoundError: If the shift does not belong to the farm.
        """
        await self.get_shift(shift_id, farm_id)

        (
            self.client.table("shifts")
            .delete()
            .eq("id", str(shift_id))
            .eq("farm_id", str(farm_id))
            .execute()
        )

        logger.info("Deleted shift %s of farm %s", shift_id, farm_id)

    async def list_signups(self, farm_id: UUID, shift_id: UUID) -> ShiftSignupsResponse:
        """Get the volunteers signed up for a shift with harvest totals."""
        await self.get_shift(shift_id, farm_id)

        response = (
            self.client.table("shift_signups")
            .select("id, volunteer_name, amount_picked_lbs, amount_donated_lbs, logged_donation")
            .eq("shift_id", str(shift_id))
            .execute()
        )

        signups = [
            SignupDetail(
                id=row["id"],
                volunteer_name=row["volunteer_name"],
                amount_picked_lbs=float(row.get("amount_picked_lbs") or 0),
                amount_donated_lbs=float(row.get("amount_donated_lbs") or 0),
                logged_donation=bool(row.get("logged_donation")),
            )
            for row in response.data or []
        ]

        return ShiftSignupsResponse(
            signups=signups,
            total_picked_lbs=sum(s.amount_picked_lbs for s in signups),
            total_donated_lbs=sum(s.amount_donated_lbs for s in signups),
        )

    async def sign_up(self, shift_id: UUID, volunteer_name: str) -> ShiftSignupResponse:
        """Sign a volunteer up for a shift.

        The shift is marked full when the new signup count reaches its
        volunteer limit.

        Args:
            shift_id: The shift's UUID.
            volunteer_name: Name on the active volunteer profile.

        Returns:
            ShiftSignupResponse: Confirmation with whether the shift is now full.

        Raises:
            NotFoundError: If the shift does not exist.
            ConflictError: If the shift is full or cancelled, or the volunteer
                is already signed up.
        """
        shift = await self.get_shift(shift_id)

        if shift["status"] == ShiftStatus.FULL.value:
            raise ConflictError("This shift is already full.")
        if shift["status"] == ShiftStatus.CANCELLED.value:
            raise ConflictError("This shift has been cancelled.")

        existing = (
            self.client.table("shift_signups")
            .select("id")
            .eq("shift_id", str(shift_id))
            .eq("volunteer_name", volunteer_name)
            .execute()
        )
        if existing.data:
            raise ConflictError("You are already signed up for this shift.")

        (
            self.client.table("shift_signups")
            .insert({"shift_id": str(shift_id), "volunteer_name": volunteer_name})
            .execute()
        )

        count_response = (
            self.client.table("shift_signups")
            .select("id", count="exact")
            .eq("shift_id", str(shift_id))
            .execute()
        )
        signed_up = count_response.count or 0

        shift_full = signed_up >= shift["volunteer_limit"]
        if shift_full:
            (
                self.client.table("shifts")
                .update({"status": ShiftStatus.FULL.value})
                .eq("id", str(shift_id))
                .execute()
            )
            logger.info("Shift %s is now full (%d volunteers)", shift_id, signed_up)

        logger.info("Volunteer %s signed up for shift %s", volunteer_name, shift_id)

        return ShiftSignupResponse(
            shift_id=shift_id,
            volunteer_name=volunteer_name,
            shift_full=shift_full,
            message=f"You're signed up for {shift['fruit']} on {shift['date']}.",
        )
