"""Role profile business logic service."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from fruitnut.api.middleware.error_handler import NotFoundError, ValidationError
from fruitnut.core.config import get_settings
from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.profile import UserProfileCreate
from fruitnut.schemas.profile import Profile, Role, VolunteerProfileUpdate

logger = logging.getLogger(__name__)

# Retry configuration for profile loads
MIN_WAIT_SECONDS = 0.2
MAX_WAIT_SECONDS = 2


class ProfileService:
    """Service for reading and editing user role profiles."""

    def __init__(self) -> None:
        """Initialize profile service with Supabase client."""
        self.client = get_supabase_client()
        self.settings = get_settings()

    async def list_profiles(self, user_id: UUID) -> list[Profile]:
        """Get every profile owned by a user.

        Transient network errors are retried with exponential backoff;
        the last error is re-raised once the attempts are used up.

        Args:
            user_id: The auth user ID.

        Returns:
            list[Profile]: The user's profiles, oldest first.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.profile_load_attempts),
            wait=wait_exponential(multiplier=MIN_WAIT_SECONDS, min=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying profile load for user %s (attempt %d)",
                        user_id,
                        attempt.retry_state.attempt_number,
                    )
                response = (
                    self.client.table("user_profiles")
                    .select("*")
                    .eq("user_id", str(user_id))
                    .order("created_at")
                    .execute()
                )

        return [Profile.from_row(row) for row in response.data or []]

    async def get_profile(self, profile_id: UUID) -> Profile | None:
        """Get a profile by ID.

        Args:
            profile_id: The profile's UUID.

        Returns:
            Profile | None: The profile or None if not found.
        """
        response = (
            self.client.table("user_profiles")
            .select("*")
            .eq("id", str(profile_id))
            .maybe_single()
            .execute()
        )

        return Profile.from_row(response.data) if response and response.data else None

    async def get_roles(self, user_id: UUID) -> set[Role]:
        """Get the roles a user already has a profile for."""
        response = (
            self.client.table("user_profiles")
            .select("role")
            .eq("user_id", str(user_id))
            .execute()
        )

        return {Role(row["role"]) for row in response.data or []}

    async def create_profile(self, data: UserProfileCreate) -> Profile:
        """Insert a new profile row.

        Args:
            data: Column values of the new profile.

        Returns:
            Profile: The created profile.
        """
        response = (
            self.client.table("user_profiles")
            .insert(dict(data))
            .execute()
        )

        profile = Profile.from_row(response.data[0])
        logger.info("Created %s profile %s for user %s", profile.role.value, profile.id, profile.user_id)
        return profile

    async def update_volunteer_profile(
        self,
        profile_id: UUID,
        data: VolunteerProfileUpdate,
    ) -> Profile:
        """Update the name and phone of a volunteer profile.

        Args:
            profile_id: The volunteer profile's UUID.
            data: New values.

        Returns:
            Profile: The updated profile.

        Raises:
            ValidationError: If the name is blank.
            NotFoundError: If the profile does not exist.
        """
        name = data.volunteer_name.strip()
        if not name:
            raise ValidationError("Please enter your name.")

        update_data: dict[str, Any] = {
            "volunteer_name": name,
            "phone": (data.phone or "").strip() or None,
        }

        return await self._update(profile_id, update_data)

    async def sign_waiver(self, profile_id: UUID) -> Profile:
        """Record that the volunteer agreed to the waiver.

        Args:
            profile_id: The volunteer profile's UUID.

        Returns:
            Profile: The updated profile.
        """
        update_data = {
            "waiver_agreed": True,
            "waiver_agreed_at": datetime.now(timezone.utc).isoformat(),
        }

        profile = await self._update(profile_id, update_data)
        logger.info("Waiver signed for profile %s", profile_id)
        return profile

    async def _update(self, profile_id: UUID, update_data: dict[str, Any]) -> Profile:
        response = (
            self.client.table("user_profiles")
            .update(update_data)
            .eq("id", str(profile_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Profile not found")

        return Profile.from_row(response.data[0])
