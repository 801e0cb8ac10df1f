"""Farm business logic service."""

from uuid import UUID

from fruitnut.api.middleware.error_handler import NotFoundError, ValidationError
from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.farm import Farm
from fruitnut.schemas.farm import FarmUpdate


class FarmService:
    """Service for managing farms."""

    def __init__(self) -> None:
        """Initialize farm service with Supabase client."""
        self.client = get_supabase_client()

    async def create_farm(self, user_id: UUID, name: str, owner_name: str = "") -> Farm:
        """Create a farm owned by a user.

        Args:
            user_id: The farmer's auth user ID.
            name: Farm name.
            owner_name: Owner's name.

        Returns:
            Farm: The created farm.

        Raises:
            ValidationError: If the farm could not be created.
        """
        response = (
            self.client.table("farms")
            .insert({"name": name, "owner_name": owner_name, "user_id": str(user_id)})
            .execute()
        )

        if not response.data:
            raise ValidationError("Failed to create farm. Please try again.")

        return response.data[0]

    async def get_farm(self, farm_id: UUID) -> Farm:
        """Get a farm by ID.

        Raises:
            NotFoundError: If the farm does not exist.
        """
        response = (
            self.client.table("farms")
            .select("*")
            .eq("id", str(farm_id))
            .maybe_single()
            .execute()
        )

        if not response or not response.data:
            raise NotFoundError("Farm not found")

        return response.data

    async def update_farm(self, farm_id: UUID, data: FarmUpdate) -> Farm:
        """Update farm details.

        Args:
            farm_id: The farm's UUID.
            data: The fields to update.

        Returns:
            Farm: The updated farm.
        """
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if not update_data:
            # No changes, return current farm
            return await self.get_farm(farm_id)

        response = (
            self.client.table("farms")
            .update(update_data)
            .eq("id", str(farm_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Farm not found")

        return response.data[0]

    async def delete_farm(self, farm_id: UUID) -> None:
        """Delete a farm, used to undo a role setup whose profile was not written."""
        self.client.table("farms").delete().eq("id", str(farm_id)).execute()
