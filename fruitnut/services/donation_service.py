"""Donation business logic service."""

import logging
from typing import Any
from uuid import UUID

from fruitnut.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.donation import Donation, DonationStatus
from fruitnut.schemas.donation import (
    Contribution,
    ContributionsResponse,
    DonationCreate,
    DonationResponse,
    DonationUpdate,
)

logger = logging.getLogger(__name__)


def _embedded(row: dict[str, Any], table: str) -> dict[str, Any] | None:
    embedded = row.get(table)
    if isinstance(embedded, list):
        return embedded[0] if embedded else None
    return embedded


def _name(row: dict[str, Any], table: str) -> str | None:
    embedded = _embedded(row, table)
    return embedded.get("name") if embedded else None


def _shift_label(row: dict[str, Any]) -> str | None:
    shift = _embedded(row, "shifts")
    if not shift:
        return None
    return f"{shift.get('date')} - {shift.get('fruit')}"


def _to_response(row: dict[str, Any]) -> DonationResponse:
    return DonationResponse(
        id=row["id"],
        date=row["date"],
        fruit=row["fruit"],
        amount_picked_lbs=float(row.get("amount_picked_lbs") or 0),
        amount_donated_lbs=float(row.get("amount_donated_lbs") or 0),
        volunteer_count=row.get("volunteer_count") or 0,
        status=row["status"],
        center_id=row.get("center_id"),
        center_name=_name(row, "donation_centers"),
        farm_name=_name(row, "farms"),
        shift_id=row.get("shift_id"),
        shift_label=_shift_label(row),
        nullification_reason=row.get("nullification_reason"),
    )


class DonationService:
    """Service for logging donations and tracking their delivery."""

    def __init__(self) -> None:
        """Initialize donation service with Supabase client."""
        self.client = get_supabase_client()

    async def list_farm_donations(
        self,
        farm_id: UUID,
        status: DonationStatus | None = None,
    ) -> list[DonationResponse]:
        """Get the donations of a farm, newest first.

        Args:
            farm_id: The farm's UUID.
            status: Only return donations with this status.

        Returns:
            list[DonationResponse]: Donations with center names and shift labels.
        """
        query = (
            self.client.table("donations")
            .select("*, donation_centers(name), shifts(date, fruit)")
            .eq("farm_id", str(farm_id))
        )
        if status is not None:
            query = query.eq("status", status.value)

        response = query.order("created_at", desc=True).execute()

        return [_to_response(row) for row in response.data or []]

    async def get_donation(self, donation_id: UUID, farm_id: UUID | None = None) -> Donation:
        """Get a donation by ID, optionally scoped to a farm.

        Raises:
            NotFoundError: If the donation does not exist.
        """
        query = self.client.table("donations").select("*").eq("id", str(donation_id))
        if farm_id is not None:
            query = query.eq("farm_id", str(farm_id))

        response = query.maybe_single().execute()

        if not response or not response.data:
            raise NotFoundError("Donation not found")

        return response.data

    async def log_donation(self, farm_id: UUID, data: DonationCreate) -> Donation:
        """Log a donation for a farm.

        Raises:
            ValidationError: If more pounds are donated than were picked.
        """
        if data.amount_donated_lbs > data.amount_picked_lbs:
            raise ValidationError("Donated amount cannot exceed picked amount.")

        insert_data = data.model_dump(mode="json")
        insert_data["farm_id"] = str(farm_id)
        insert_data["date"] = data.date.strip()
        insert_data["fruit"] = data.fruit.strip()

        response = (
            self.client.table("donations")
            .insert(insert_data)
            .execute()
        )

        if not response.data:
            raise ValidationError("Failed to log donation. Please try again.")

        donation = response.data[0]
        logger.info("Logged donation %s for farm %s", donation["id"], farm_id)
        return donation

    async def update_donation(self, farm_id: UUID, donation_id: UUID, data: DonationUpdate) -> Donation:
        """Edit a donation of a farm.

        Raises:
            NotFoundError: If the donation does not belong to the farm.
            ConflictError: If the donation was nullified.
        """
        current = await self.get_donation(donation_id, farm_id)
        if current["status"] == DonationStatus.NULLIFIED.value:
            raise ConflictError("Nullified donations cannot be edited.")

        update_data = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
        if not update_data:
            return current

        picked = update_data.get("amount_picked_lbs", current.get("amount_picked_lbs") or 0)
        donated = update_data.get("amount_donated_lbs", current.get("amount_donated_lbs") or 0)
        if donated > picked:
            raise ValidationError("Donated amount cannot exceed picked amount.")

        response = (
            self.client.table("donations")
            .update(update_data)
            .eq("id", str(donation_id))
            .eq("farm_id", str(farm_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Donation not found")

        return response.data[0]

    async def nullify_donation(self, farm_id: UUID, donation_id: UUID, reason: str) -> Donation:
        """Void a donation, keeping it on record with the reason.

        Raises:
            ValidationError: If no reason is given.
            ConflictError: If the donation is already nullified.
        """
        reason = reason.strip()
        if not reason:
            raise ValidationError("Please give a reason for nullifying this donation.")

        current = await self.get_donation(donation_id, farm_id)
        if current["status"] == DonationStatus.NULLIFIED.value:
            raise ConflictError("This donation is already nullified.")

        response = (
            self.client.table("donations")
            .update({"status": DonationStatus.NULLIFIED.value, "nullification_reason": reason})
            .eq("id", str(donation_id))
            .eq("farm_id", str(farm_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Donation not found")

        logger.info("Nullified donation %s of farm %s", donation_id, farm_id)
        return response.data[0]

    async def list_pending_for_center(self, center_id: UUID) -> list[DonationResponse]:
        """Get the pending donations assigned to a center, latest date first."""
        response = (
            self.client.table("donations")
            .select("*, farms(name), shifts(date, fruit)")
            .eq("center_id", str(center_id))
            .eq("status", DonationStatus.PENDING.value)
            .order("date", desc=True)
            .execute()
        )

        return [_to_response(row) for row in response.data or []]

    async def complete_assignment(self, center_id: UUID, donation_id: UUID) -> Donation:
        """Mark a donation received by the center as completed.

        Raises:
            NotFoundError: If the donation is not assigned to the center.
            ConflictError: If the donation was nullified.
        """
        response = (
            self.client.table("donations")
            .select("*")
            .eq("id", str(donation_id))
            .eq("center_id", str(center_id))
            .maybe_single()
            .execute()
        )

        if not response or not response.data:
            raise NotFoundError("Donation not found")
        if response.data["status"] == DonationStatus.NULLIFIED.value:
            raise ConflictError("Nullified donations cannot be completed.")

        updated = (
            self.client.table("donations")
            .update({"status": DonationStatus.COMPLETED.value})
            .eq("id", str(donation_id))
            .eq("center_id", str(center_id))
            .execute()
        )

        if not updated.data:
            raise NotFoundError("Donation not found")

        logger.info("Center %s completed donation %s", center_id, donation_id)
        return updated.data[0]

    async def list_contributions(self, volunteer_name: str) -> ContributionsResponse:
        """Get the logged harvest contributions of a volunteer with totals.

        Args:
            volunteer_name: Name on the active volunteer profile.

        Returns:
            ContributionsResponse: Contributions and picked / donated totals.
        """
        response = (
            self.client.table("shift_signups")
            .select(
                "id, amount_picked_lbs, amount_donated_lbs, "
                "shifts(date, fruit, farms(name), donation_centers(name))"
            )
            .eq("volunteer_name", volunteer_name)
            .eq("logged_donation", True)
            .execute()
        )

        contributions = []
        for row in response.data or []:
            shift = _embedded(row, "shifts") or {}
            contributions.append(
                Contribution(
                    id=row["id"],
                    date=shift.get("date") or "",
                    fruit=shift.get("fruit") or "",
                    farm_name=_name(shift, "farms") or "Unknown farm",
                    center_name=_name(shift, "donation_centers") or "Unknown center",
                    amount_picked_lbs=float(row.get("amount_picked_lbs") or 0),
                    amount_donated_lbs=float(row.get("amount_donated_lbs") or 0),
                )
            )

        return ContributionsResponse(
            contributions=contributions,
            total_picked_lbs=sum(c.amount_picked_lbs for c in contributions),
            total_donated_lbs=sum(c.amount_donated_lbs for c in contributions),
        )
