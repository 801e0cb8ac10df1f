"""App session composing the session, profile and active-role state."""

import logging
from typing import Callable
from uuid import UUID

from fruitnut.core.auth_provider import AuthProvider
from fruitnut.schemas.auth import Identity
from fruitnut.schemas.profile import Profile
from fruitnut.schemas.session import SessionSnapshot
from fruitnut.state.active_role import ActiveRoleSelector
from fruitnut.state.errors import ProfileNotFoundError
from fruitnut.state.events import Listener, StateEmitter
from fruitnut.state.navigation import (
    ROLE_PICKER_ROUTE,
    NavigationInput,
    classify,
    resolve_redirect,
)
from fruitnut.state.profile_registry import ProfileLoadResult, ProfileRegistry, ProfileSource
from fruitnut.state.session_store import SessionStore

logger = logging.getLogger(__name__)


class AppSession:
    """Session, profiles and active role of one app instance.

    Collaborators are injected so that tests build isolated instances.
    Screens read the state through this object and request changes
    through its methods; they never mutate the parts directly.
    """

    def __init__(self, auth: AuthProvider, profile_source: ProfileSource) -> None:
        """Wire the state components together.

        Args:
            auth: Auth provider delivering identities and auth events.
            profile_source: Where the profiles of an identity are read from.
        """
        self._auth = auth
        self.emitter = StateEmitter()
        self.selector = ActiveRoleSelector()
        self.registry = ProfileRegistry(profile_source, self.selector)
        self.store = SessionStore(auth, self.registry, self.selector, self.emitter)
        self._unsubscribe_auth = auth.on_auth_state_change(self.store.on_auth_event)

    @property
    def identity(self) -> Identity | None:
        return self.store.identity

    @property
    def profiles(self) -> tuple[Profile, ...]:
        return self.registry.profiles

    @property
    def active_profile(self) -> Profile | None:
        return self.selector.active

    @property
    def is_loading(self) -> bool:
        """Bootstrapping, or signed in while the first profile load is pending."""
        if self.store.is_loading:
            return True
        return self.store.identity is not None and not self.registry.settled

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.emitter.subscribe(listener)

    async def bootstrap(self) -> None:
        await self.store.bootstrap()

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in; returns once the profiles of the identity are loaded."""
        return await self._auth.sign_in_with_password(email, password)

    async def sign_up(self, email: str, password: str) -> Identity | None:
        return await self._auth.sign_up(email, password)

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    async def refresh_token(self) -> Identity | None:
        return await self._auth.refresh_session()

    async def refresh_profiles(self) -> ProfileLoadResult | None:
        """Reload the profiles after a profile-changing action and notify listeners."""
        result = await self.registry.refresh()
        if result is not None:
            self.emitter.emit()
        return result

    def select_profile(self, profile_id: UUID | None) -> Profile | None:
        """Make one of the loaded profiles active, or clear the selection.

        Raises:
            ProfileNotFoundError: If the profile is not one of the user's profiles.
        """
        if profile_id is None:
            self.selector.select(None)
            self.emitter.emit()
            return None

        profile = self.registry.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError()

        self.selector.select(profile)
        self.emitter.emit()
        return profile

    def navigation_input(self, route: str) -> NavigationInput:
        return NavigationInput(
            is_loading=self.is_loading,
            has_identity=self.identity is not None,
            active_role=self.selector.role,
            profile_count=len(self.registry.profiles),
            route=route,
            profile_load_failed=self.registry.load_failed,
        )

    def landing_route(self) -> str:
        """Screen to show right after signing in or up."""
        return resolve_redirect(self.navigation_input(ROLE_PICKER_ROUTE)) or ROLE_PICKER_ROUTE

    def snapshot(self, route: str) -> SessionSnapshot:
        error = self.registry.error
        return SessionSnapshot(
            phase=classify(self.navigation_input(route)).value,
            is_loading=self.is_loading,
            identity=self.identity,
            profiles=list(self.registry.profiles),
            active_profile=self.selector.active,
            profile_load_status=self.registry.status.value,
            profile_load_error=str(error) if error else None,
            route=route,
        )

    def close(self) -> None:
        self._unsubscribe_auth()
