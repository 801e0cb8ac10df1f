"""Donation center business logic service."""

from uuid import UUID

from fruitnut.api.middleware.error_handler import NotFoundError, ValidationError
from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.center import DonationCenter
from fruitnut.schemas.center import CenterUpdate


class CenterService:
    """Service for managing donation centers."""

    def __init__(self) -> None:
        """Initialize center service with Supabase client."""
        self.client = get_supabase_client()

    async def list_centers(self) -> list[DonationCenter]:
        """Get all centers as (id, name) options, sorted by name."""
        response = (
            self.client.table("donation_centers")
            .select("id, name")
            .order("name")
            .execute()
        )

        return response.data or []

    async def get_center(self, center_id: UUID) -> DonationCenter:
        """Get a center by ID.

        Raises:
            NotFoundError: If the center does not exist.
        """
        response = (
            self.client.table("donation_centers")
            .select("*")
            .eq("id", str(center_id))
            .maybe_single()
            .execute()
        )

        if not response or not response.data:
            raise NotFoundError("Donation center not found")

        return response.data

    async def create_center(
        self,
        name: str,
        address: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> DonationCenter:
        """Register a new donation center.

        Raises:
            ValidationError: If the center could not be created.
        """
        response = (
            self.client.table("donation_centers")
            .insert({"name": name, "address": address, "phone": phone, "email": email})
            .execute()
        )

        if not response.data:
            raise ValidationError("Failed to create donation center. Please try again.")

        return response.data[0]

    async def update_center(self, center_id: UUID, data: CenterUpdate) -> DonationCenter:
        """Update center details, capacity and opening hours.

        Args:
            center_id: The center's UUID.
            data: The fields to update.

        Returns:
            DonationCenter: The updated center.
        """
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if not update_data:
            return await self.get_center(center_id)

        response = (
            self.client.table("donation_centers")
            .update(update_data)
            .eq("id", str(center_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Donation center not found")

        return response.data[0]

    async def delete_center(self, center_id: UUID) -> None:
        """Delete a center, used to undo a role setup whose profile was not written."""
        self.client.table("donation_centers").delete().eq("id", str(center_id)).execute()
