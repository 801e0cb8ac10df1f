"""Active role selection for the current app session."""

import logging
from collections.abc import Sequence
from uuid import UUID

from fruitnut.schemas.profile import Profile, Role
from fruitnut.state.errors import IncompleteProfileError, NoActiveProfileError, RoleMismatchError

logger = logging.getLogger(__name__)


class ActiveRoleSelector:
    """Holds the single profile, if any, that role screens operate on.

    The selection lives in memory only. It is cleared on sign-out and on
    "switch role", and it is re-validated against every freshly loaded
    profile list.
    """

    def __init__(self) -> None:
        self._active: Profile | None = None

    @property
    def active(self) -> Profile | None:
        return self._active

    @property
    def role(self) -> Role | None:
        return self._active.role if self._active else None

    def select(self, profile: Profile | None) -> None:
        """Set the active profile, or None to return to the role picker."""
        self._active = profile
        if profile is None:
            logger.info("Active profile cleared")
        else:
            logger.info("Active profile set: %s (%s)", profile.id, profile.role.value)

    def clear(self) -> None:
        self._active = None

    def revalidate(self, profiles: Sequence[Profile]) -> bool:
        """Reconcile the selection with a freshly loaded profile list.

        If the active profile is still present its fresh copy replaces the
        old one, otherwise the selection collapses to None.

        Args:
            profiles: The newly loaded profiles.

        Returns:
            bool: True if the selection was dropped.
        """
        if self._active is None:
            return False

        for profile in profiles:
            if profile.id == self._active.id:
                self._active = profile
                return False

        logger.info("Active profile %s no longer exists, clearing selection", self._active.id)
        self._active = None
        return True

    def require(self, role: Role | None = None) -> Profile:
        """Return the active profile, optionally checking its role.

        Raises:
            NoActiveProfileError: If nothing is selected.
            RoleMismatchError: If the active profile has another role.
        """
        if self._active is None:
            raise NoActiveProfileError()
        if role is not None and self._active.role != role:
            raise RoleMismatchError(expected=role.value, actual=self._active.role.value)
        return self._active

    @property
    def farm_id(self) -> UUID:
        profile = self.require(Role.FARMER)
        if profile.farm_id is None:
            raise IncompleteProfileError("Farmer profile is not linked to a farm")
        return profile.farm_id

    @property
    def center_id(self) -> UUID:
        profile = self.require(Role.CENTER)
        if profile.center_id is None:
            raise IncompleteProfileError("Center profile is not linked to a donation center")
        return profile.center_id

    @property
    def volunteer_name(self) -> str:
        profile = self.require(Role.VOLUNTEER)
        if not profile.volunteer_name:
            raise IncompleteProfileError("Volunteer profile has no volunteer name")
        return profile.volunteer_name
