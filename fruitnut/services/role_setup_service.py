"""Role setup business logic service."""

import logging
from uuid import UUID

from fruitnut.api.middleware.error_handler import ConflictError, ValidationError
from fruitnut.models.profile import UserProfileCreate
from fruitnut.schemas.profile import Profile, Role
from fruitnut.schemas.role_setup import CenterSetupMode, RoleSetupRequest
from fruitnut.services.center_service import CenterService
from fruitnut.services.farm_service import FarmService
from fruitnut.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

# Order in which selected roles are created
ROLE_ORDER = (Role.FARMER, Role.VOLUNTEER, Role.CENTER)


class RoleSetupService:
    """Creates the profiles (and their farm / center) a user selected."""

    def __init__(
        self,
        profile_service: ProfileService | None = None,
        farm_service: FarmService | None = None,
        center_service: CenterService | None = None,
    ) -> None:
        self.profiles = profile_service or ProfileService()
        self.farms = farm_service or FarmService()
        self.centers = center_service or CenterService()

    def validate(self, data: RoleSetupRequest) -> None:
        """Check the form before anything is written.

        Raises:
            ValidationError: With the message of the first missing field.
        """
        roles = set(data.roles)
        if not roles:
            raise ValidationError("Please select at least one role to continue.")

        if Role.FARMER in roles and not data.farmer.farm_name.strip():
            raise ValidationError("Please enter your farm name.")

        if Role.VOLUNTEER in roles and not data.volunteer.volunteer_name.strip():
            raise ValidationError("Please enter your volunteer name.")

        if Role.CENTER in roles:
            if data.center.mode == CenterSetupMode.CREATE and not data.center.name.strip():
                raise ValidationError("Please enter your center name.")
            if data.center.mode == CenterSetupMode.JOIN and data.center.center_id is None:
                raise ValidationError("Please select a donation center.")

    async def complete(self, user_id: UUID, data: RoleSetupRequest) -> list[Profile]:
        """Create one profile per selected role.

        A user holds at most one profile per role; selecting a role the
        user already has, or joining a center that does not exist, is
        rejected before anything is written. When a profile insert fails
        the farm or center created for it is deleted again. Profiles
        created for earlier roles are kept.

        Args:
            user_id: The signed-in user's ID.
            data: The role setup form.

        Returns:
            list[Profile]: The created profiles.

        Raises:
            ValidationError: If the form is incomplete.
            ConflictError: If the user already has one of the selected roles.
            NotFoundError: If the center to join does not exist.
        """
        self.validate(data)

        selected = [role for role in ROLE_ORDER if role in set(data.roles)]
        existing = await self.profiles.get_roles(user_id)
        duplicates = [role.value for role in selected if role in existing]
        if duplicates:
            raise ConflictError(f"You already have a {', '.join(duplicates)} profile.")

        joined_center_id = None
        if Role.CENTER in selected and data.center.mode == CenterSetupMode.JOIN:
            center = await self.centers.get_center(data.center.center_id)
            joined_center_id = center["id"]

        created: list[Profile] = []
        for role in selected:
            if role == Role.FARMER:
                profile_data = await self._farmer_profile(user_id, data)
            elif role == Role.VOLUNTEER:
                profile_data = self._volunteer_profile(user_id, data)
            else:
                profile_data = await self._center_profile(user_id, data, joined_center_id)

            try:
                created.append(await self.profiles.create_profile(profile_data))
            except Exception:
                logger.warning("Creating %s profile failed for user %s", role.value, user_id)
                await self._discard_linked_row(role, data, profile_data)
                raise

        logger.info("Role setup completed for user %s: %s", user_id, [p.role.value for p in created])
        return created

    async def _farmer_profile(self, user_id: UUID, data: RoleSetupRequest) -> UserProfileCreate:
        farm = await self.farms.create_farm(
            user_id=user_id,
            name=data.farmer.farm_name.strip(),
            owner_name=data.farmer.owner_name.strip(),
        )
        return UserProfileCreate(user_id=str(user_id), role=Role.FARMER.value, farm_id=str(farm["id"]))

    def _volunteer_profile(self, user_id: UUID, data: RoleSetupRequest) -> UserProfileCreate:
        return UserProfileCreate(
            user_id=str(user_id),
            role=Role.VOLUNTEER.value,
            volunteer_name=data.volunteer.volunteer_name.strip(),
            phone=data.volunteer.phone.strip() or None,
        )

    async def _center_profile(
        self, user_id: UUID, data: RoleSetupRequest, joined_center_id: str | None
    ) -> UserProfileCreate:
        setup = data.center
        if setup.mode == CenterSetupMode.CREATE:
            center = await self.centers.create_center(
                name=setup.name.strip(),
                address=setup.address.strip() or None,
                phone=setup.phone.strip() or None,
                email=setup.email.strip() or None,
            )
            center_id = center["id"]
        else:
            center_id = joined_center_id

        return UserProfileCreate(user_id=str(user_id), role=Role.CENTER.value, center_id=str(center_id))

    async def _discard_linked_row(self, role: Role, data: RoleSetupRequest, profile_data: UserProfileCreate) -> None:
        """Delete the farm or new center created for a profile that was not written."""
        if role == Role.FARMER:
            await self.farms.delete_farm(UUID(profile_data["farm_id"]))
        elif role == Role.CENTER and data.center.mode == CenterSetupMode.CREATE:
            await self.centers.delete_center(UUID(profile_data["center_id"]))
