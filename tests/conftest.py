"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from contextlib import ExitStack
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("PROFILE_LOAD_ATTEMPTS", "1")

from fruitnut.core.auth_provider import AuthListener, AuthProviderError  # noqa: E402
from fruitnut.schemas.auth import Identity  # noqa: E402
from fruitnut.schemas.profile import Profile, Role  # noqa: E402
from fruitnut.state.app_session import AppSession  # noqa: E402
from fruitnut.state.events import AuthEvent  # noqa: E402

USER_ID = UUID("660e8400-e29b-41d4-a716-446655440000")
OTHER_USER_ID = UUID("770e8400-e29b-41d4-a716-446655440000")
FARM_ID = UUID("110e8400-e29b-41d4-a716-446655440000")
CENTER_ID = UUID("220e8400-e29b-41d4-a716-446655440000")

# Modules that hold their own reference to get_supabase_client
SUPABASE_CLIENT_TARGETS = (
    "fruitnut.core.supabase.get_supabase_client",
    "fruitnut.services.profile_service.get_supabase_client",
    "fruitnut.services.farm_service.get_supabase_client",
    "fruitnut.services.center_service.get_supabase_client",
    "fruitnut.services.shift_service.get_supabase_client",
    "fruitnut.services.donation_service.get_supabase_client",
    "fruitnut.services.report_service.get_supabase_client",
)


class FakeAuthProvider:
    """In-memory auth provider delivering events like SupabaseAuthProvider."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, Identity]] = {}
        self.current: Identity | None = None
        self.confirm_email = False
        self.restore_error: str | None = None
        self.events: list[AuthEvent] = []
        self._listeners: list[AuthListener] = []

    def register(self, email: str, password: str = "secret123", user_id: UUID = USER_ID) -> Identity:
        identity = Identity(id=user_id, email=email)
        self.accounts[email] = (password, identity)
        return identity

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def emit(self, event: AuthEvent, identity: Identity | None) -> None:
        self.events.append(event)
        for listener in list(self._listeners):
            await listener(event, identity)

    async def get_session(self) -> Identity | None:
        if self.restore_error:
            raise AuthProviderError(self.restore_error)
        return self.current

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthProviderError("Invalid login credentials")
        self.current = account[1]
        await self.emit(AuthEvent.SIGNED_IN, self.current)
        return self.current

    async def sign_up(self, email: str, password: str) -> Identity | None:
        if email in self.accounts:
            raise AuthProviderError("User already registered")
        identity = self.register(email, password, user_id=uuid4())
        if self.confirm_email:
            return None
        self.current = identity
        await self.emit(AuthEvent.SIGNED_IN, identity)
        return identity

    async def sign_out(self) -> None:
        self.current = None
        await self.emit(AuthEvent.SIGNED_OUT, None)

    async def refresh_session(self) -> Identity | None:
        if self.current is None:
            return None
        await self.emit(AuthEvent.TOKEN_REFRESHED, self.current)
        return self.current


class FakeProfileSource:
    """Profile source serving profiles from memory."""

    def __init__(self) -> None:
        self.by_user: dict[UUID, list[Profile]] = {}
        self.error: Exception | None = None
        self.calls: list[UUID] = []

    def add(self, profile: Profile) -> Profile:
        self.by_user.setdefault(profile.user_id, []).append(profile)
        return profile

    async def list_profiles(self, user_id: UUID) -> list[Profile]:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return list(self.by_user.get(user_id, []))


def build_profile(role: Role, user_id: UUID = USER_ID, **overrides: Any) -> Profile:
    """Build a valid profile of a role with its linkage filled in."""
    data: dict[str, Any] = {"id": uuid4(), "user_id": user_id, "role": role}
    if role == Role.FARMER:
        data["farm_id"] = FARM_ID
    elif role == Role.CENTER:
        data["center_id"] = CENTER_ID
    else:
        data["volunteer_name"] = "Jamie"
    data.update(overrides)
    return Profile(**data)


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from fruitnut.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def fake_auth() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def fake_profiles() -> FakeProfileSource:
    return FakeProfileSource()


@pytest.fixture
def app_session(fake_auth: FakeAuthProvider, fake_profiles: FakeProfileSource) -> AppSession:
    """Provide an isolated app session wired to the fakes."""
    return AppSession(fake_auth, fake_profiles)


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    return build_profile


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client shared by every service.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    # Configure default mock responses
    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with ExitStack() as stack:
        for target in SUPABASE_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=mock_client))
        yield mock_client


@pytest.fixture
def client(
    mock_supabase_client: MagicMock,
    fake_auth: FakeAuthProvider,
    fake_profiles: FakeProfileSource,
) -> Generator[TestClient, None, None]:
    """Provide a test client whose app session runs on the fakes.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.
        fake_auth: Auth provider used by the app session.
        fake_profiles: Profile source used by the app session.

    Yields:
        TestClient: FastAPI test client. Redirects are not followed.
    """
    with (
        patch("fruitnut.main.SupabaseAuthProvider", return_value=fake_auth),
        patch("fruitnut.main.ProfileService", return_value=fake_profiles),
    ):
        from fruitnut.main import app

        with TestClient(app, follow_redirects=False) as test_client:
            yield test_client


@pytest.fixture
def sign_in_as(
    client: TestClient,
    fake_auth: FakeAuthProvider,
    fake_profiles: FakeProfileSource,
) -> Callable[..., list[Profile]]:
    """Sign in through the API as a user holding profiles of the given roles.

    The first profile is made active unless activate is False.

    Returns:
        Callable: Helper returning the profiles it created.
    """

    def _sign_in(*roles: Role, activate: bool = True) -> list[Profile]:
        fake_auth.register("user@example.com")
        profiles = [fake_profiles.add(build_profile(role)) for role in roles]

        response = client.post("/auth/sign-in", json={"email": "user@example.com", "password": "secret123"})
        assert response.status_code == 200

        if activate and profiles:
            response = client.post("/session/active-profile", json={"profile_id": str(profiles[0].id)})
            assert response.status_code == 200
        return profiles

    return _sign_in
