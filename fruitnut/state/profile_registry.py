"""Registry of the role profiles owned by the signed-in identity."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol
from uuid import UUID

from fruitnut.schemas.profile import Profile
from fruitnut.state.active_role import ActiveRoleSelector

logger = logging.getLogger(__name__)


class ProfileSource(Protocol):
    """Anything that can list the profiles of a user."""

    async def list_profiles(self, user_id: UUID) -> list[Profile]: ...


class LoadStatus(str, Enum):
    """Outcome of the most recent applied profile load."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ProfileLoadResult:
    """Typed result of a profile load.

    profiles is the registry content after the load: the new list on
    success, the untouched previous list on failure or when the load was
    superseded by a newer one (stale).
    """

    profiles: tuple[Profile, ...]
    error: Exception | None = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale


class ProfileRegistry:
    """Holds the authoritative profile list for the current identity.

    Every load takes a generation token. A load only applies its result if
    no newer load (or clear) happened while it was in flight, so an old
    response can never overwrite a newer one.
    """

    def __init__(self, source: ProfileSource, selector: ActiveRoleSelector) -> None:
        """Initialize the registry.

        Args:
            source: Where profiles are read from.
            selector: Active role selector re-validated after each load.
        """
        self._source = source
        self._selector = selector
        self._profiles: tuple[Profile, ...] = ()
        self._identity_id: UUID | None = None
        self._generation = 0
        self._status = LoadStatus.IDLE
        self._error: Exception | None = None
        self._settled = False

    @property
    def profiles(self) -> tuple[Profile, ...]:
        return self._profiles

    @property
    def identity_id(self) -> UUID | None:
        return self._identity_id

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def settled(self) -> bool:
        """Whether a load for the current identity has completed, successfully or not."""
        return self._settled

    @property
    def load_failed(self) -> bool:
        return self._status == LoadStatus.FAILED

    def get(self, profile_id: UUID) -> Profile | None:
        for profile in self._profiles:
            if profile.id == profile_id:
                return profile
        return None

    async def load(self, identity_id: UUID) -> ProfileLoadResult:
        """Load all profiles owned by an identity, replacing the list wholesale.

        Args:
            identity_id: The auth user ID.

        Returns:
            ProfileLoadResult: Applied, failed or stale outcome.
        """
        self._generation += 1
        token = self._generation

        if identity_id != self._identity_id:
            self._identity_id = identity_id
            self._profiles = ()
            self._settled = False
            self._error = None

        self._status = LoadStatus.LOADING

        try:
            profiles = await self._source.list_profiles(identity_id)
        except Exception as e:
            if token != self._generation:
                logger.debug("Discarding failed profile load %d, superseded by %d", token, self._generation)
                return ProfileLoadResult(profiles=self._profiles, error=e, stale=True)

            logger.warning("Profile load failed for user %s: %s", identity_id, e)
            self._status = LoadStatus.FAILED
            self._error = e
            self._settled = True
            return ProfileLoadResult(profiles=self._profiles, error=e)

        if token != self._generation:
            logger.debug("Discarding profile load %d, superseded by %d", token, self._generation)
            return ProfileLoadResult(profiles=self._profiles, stale=True)

        self._profiles = tuple(profiles)
        self._status = LoadStatus.LOADED
        self._error = None
        self._settled = True
        self._selector.revalidate(self._profiles)

        logger.info("Loaded %d profile(s) for user %s", len(self._profiles), identity_id)
        return ProfileLoadResult(profiles=self._profiles)

    async def refresh(self) -> ProfileLoadResult | None:
        """Re-run the load for the current identity.

        Returns:
            ProfileLoadResult | None: None when no identity is present.
        """
        if self._identity_id is None:
            return None
        return await self.load(self._identity_id)

    def clear(self) -> None:
        """Forget all profiles and invalidate any load in flight."""
        self._generation += 1
        self._identity_id = None
        self._profiles = ()
        self._status = LoadStatus.IDLE
        self._error = None
        self._settled = False
