"""Auth provider port and its Supabase Auth implementation."""

import logging
from typing import Awaitable, Callable, Protocol
from uuid import UUID

import httpx
from supabase import Client
from supabase_auth.errors import AuthError

from fruitnut.core.config import get_settings
from fruitnut.core.supabase import create_auth_client, get_supabase_client
from fruitnut.schemas.auth import Identity
from fruitnut.state.events import AuthEvent

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Identity | None], Awaitable[None]]


class AuthProviderError(Exception):
    """Raised when the auth provider rejects or cannot complete a request."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthProvider(Protocol):
    """Operations the app session needs from an auth provider."""

    async def get_session(self) -> Identity | None: ...

    async def sign_in_with_password(self, email: str, password: str) -> Identity: ...

    async def sign_up(self, email: str, password: str) -> Identity | None: ...

    async def sign_out(self) -> None: ...

    async def refresh_session(self) -> Identity | None: ...

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]: ...


def _identity_from_user(user: object | None) -> Identity | None:
    if user is None:
        return None
    return Identity(id=UUID(str(user.id)), email=getattr(user, "email", None))


class SupabaseAuthProvider:
    """Supabase Auth behind the AuthProvider port.

    Listeners are awaited after each successful operation, in order, so
    callers of sign_in_with_password / sign_out resume only after the app
    state has reacted to the change.

    The session lives in the auth client. Its access token is copied to
    the data client before listeners run, so table queries are made as
    the signed-in user; after sign out they fall back to the anon key.
    """

    def __init__(self, client: Client | None = None, data_client: Client | None = None) -> None:
        """Initialize with an isolated auth client.

        Args:
            client: Optional Supabase client, a fresh one is created if omitted.
            data_client: Client used for table queries, the shared one if omitted.
        """
        self.client = client or create_auth_client()
        self.data_client = data_client or get_supabase_client()
        self._listeners: list[AuthListener] = []

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _authorize_queries(self, access_token: str | None) -> None:
        self.data_client.postgrest.auth(access_token or get_settings().supabase_key)

    async def _notify(self, event: AuthEvent, identity: Identity | None) -> None:
        logger.debug("Auth event %s for %s", event.value, identity.id if identity else None)
        for listener in list(self._listeners):
            await listener(event, identity)

    async def get_session(self) -> Identity | None:
        """Return the identity of a stored valid session, if any.

        Raises:
            AuthProviderError: If the provider could not be reached.
        """
        try:
            session = self.client.auth.get_session()
        except (AuthError, httpx.HTTPError) as e:
            raise AuthProviderError(f"Could not restore session: {e}") from e

        if session is None:
            return None
        self._authorize_queries(session.access_token)
        return _identity_from_user(session.user)

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Sign in with email and password.

        Raises:
            AuthProviderError: On bad credentials or network failure.
        """
        try:
            response = self.client.auth.sign_in_with_password(
                {
                    "email": email,
                    "password": password,
                }
            )
        except (AuthError, httpx.HTTPError) as e:
            raise AuthProviderError(str(e)) from e

        identity = _identity_from_user(response.user)
        if identity is None or response.session is None:
            raise AuthProviderError("Sign in failed: no session created")

        self._authorize_queries(response.session.access_token)
        logger.info("User signed in: %s", identity.id)
        await self._notify(AuthEvent.SIGNED_IN, identity)
        return identity

    async def sign_up(self, email: str, password: str) -> Identity | None:
        """Create an account.

        Returns:
            Identity | None: The new identity when the provider opened a
            session right away, None when email confirmation is pending.

        Raises:
            AuthProviderError: If the account could not be created.
        """
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                }
            )
        except (AuthError, httpx.HTTPError) as e:
            raise AuthProviderError(str(e)) from e

        if response.user is None:
            raise AuthProviderError("Failed to create user account")

        logger.info("User signed up: %s", response.user.id)

        if response.session is None:
            return None

        self._authorize_queries(response.session.access_token)
        identity = _identity_from_user(response.user)
        await self._notify(AuthEvent.SIGNED_IN, identity)
        return identity

    async def sign_out(self) -> None:
        """Sign out. Always ends in the signed-out state."""
        try:
            self.client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            # The local session is dropped either way
            logger.warning("Sign out request failed: %s", e)

        self._authorize_queries(None)
        logger.info("User signed out")
        await self._notify(AuthEvent.SIGNED_OUT, None)

    async def refresh_session(self) -> Identity | None:
        """Refresh the access token of the current session.

        Raises:
            AuthProviderError: If the refresh token is invalid or expired.
        """
        try:
            response = self.client.auth.refresh_session()
        except (AuthError, httpx.HTTPError) as e:
            raise AuthProviderError(f"Token refresh failed: {e}") from e

        identity = _identity_from_user(response.user)
        if identity is None:
            self._authorize_queries(None)
            await self._notify(AuthEvent.SIGNED_OUT, None)
            return None

        if response.session is not None:
            self._authorize_queries(response.session.access_token)
        await self._notify(AuthEvent.TOKEN_REFRESHED, identity)
        return identity
