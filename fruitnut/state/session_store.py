"""Session store tracking the authenticated identity."""

import logging

from fruitnut.core.auth_provider import AuthProvider, AuthProviderError
from fruitnut.schemas.auth import Identity
from fruitnut.state.active_role import ActiveRoleSelector
from fruitnut.state.events import AuthEvent, StateEmitter
from fruitnut.state.profile_registry import ProfileRegistry

logger = logging.getLogger(__name__)


class SessionStore:
    """Tracks the current identity and reacts to auth events.

    Listeners are only notified once the profile registry has been
    refreshed or cleared for the new identity, so the navigation guard
    never evaluates a half-updated state.
    """

    def __init__(
        self,
        auth: AuthProvider,
        registry: ProfileRegistry,
        selector: ActiveRoleSelector,
        emitter: StateEmitter,
    ) -> None:
        self._auth = auth
        self._registry = registry
        self._selector = selector
        self._emitter = emitter
        self._identity: Identity | None = None
        self._is_loading = True

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def is_loading(self) -> bool:
        """True until bootstrap() has completed."""
        return self._is_loading

    async def bootstrap(self) -> None:
        """Restore an existing session on startup.

        Loads the profiles of a restored identity before leaving the
        loading state. A failure to reach the auth provider counts as
        "no identity". Runs at most once.
        """
        if not self._is_loading:
            return

        try:
            identity = await self._auth.get_session()
        except AuthProviderError as e:
            logger.warning("Session restore failed, starting signed out: %s", e.message)
            identity = None

        if identity is not None:
            logger.info("Restored session for user %s", identity.id)
            self._identity = identity
            await self._registry.load(identity.id)

        self._is_loading = False
        self._emitter.emit()

    async def on_auth_event(self, event: AuthEvent, identity: Identity | None) -> None:
        """Apply an auth state change.

        Args:
            event: The auth event delivered by the provider.
            identity: The identity attached to the event, if any.
        """
        if event == AuthEvent.SIGNED_OUT:
            self._sign_out_locally()
            return

        if event == AuthEvent.SIGNED_IN:
            if identity is None:
                self._sign_out_locally()
                return
            await self._sign_in(identity)
            return

        if event in (AuthEvent.TOKEN_REFRESHED, AuthEvent.USER_UPDATED):
            if identity is None:
                return
            if self._identity is None or identity.id != self._identity.id:
                await self._sign_in(identity)
                return
            self._identity = identity
            self._emitter.emit()
            return

        logger.debug("Ignoring auth event %s", event.value)

    async def _sign_in(self, identity: Identity) -> None:
        if self._identity is not None and self._identity.id != identity.id:
            self._selector.clear()
            self._registry.clear()

        self._identity = identity
        await self._registry.load(identity.id)
        self._emitter.emit()

    def _sign_out_locally(self) -> None:
        self._identity = None
        self._registry.clear()
        self._selector.clear()
        self._emitter.emit()
