"""Unit tests for FastAPI dependency injection functions."""

from collections.abc import Callable

import pytest

from fruitnut.api.deps import (
    get_center_id,
    get_current_identity,
    get_farm_id,
    get_volunteer_name,
    require_role,
)
from fruitnut.api.middleware.error_handler import AuthenticationError
from fruitnut.schemas.profile import Profile, Role
from fruitnut.state.app_session import AppSession
from fruitnut.state.errors import IncompleteProfileError, NoActiveProfileError, RoleMismatchError


async def _signed_in(app_session: AppSession, fake_auth, fake_profiles, *profiles: Profile) -> None:
    fake_auth.register("user@example.com")
    for profile in profiles:
        fake_profiles.add(profile)
    await app_session.bootstrap()
    await app_session.sign_in("user@example.com", "secret123")


class TestGetCurrentIdentity:
    """Tests for get_current_identity dependency."""

    @pytest.mark.asyncio
    async def test_signed_out(self, app_session: AppSession) -> None:
        await app_session.bootstrap()

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(app_session)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_signed_in(self, app_session: AppSession, fake_auth, fake_profiles) -> None:
        await _signed_in(app_session, fake_auth, fake_profiles)

        identity = await get_current_identity(app_session)

        assert identity.email == "user@example.com"


class TestRequireRole:
    """Tests for require_role and the role accessors."""

    @pytest.mark.asyncio
    async def test_no_active_profile(
        self, app_session: AppSession, fake_auth, fake_profiles, make_profile: Callable[..., Profile]
    ) -> None:
        await _signed_in(app_session, fake_auth, fake_profiles, make_profile(Role.FARMER))

        with pytest.raises(NoActiveProfileError):
            require_role(Role.FARMER)(app_session)

    @pytest.mark.asyncio
    async def test_role_mismatch(
        self, app_session: AppSession, fake_auth, fake_profiles, make_profile: Callable[..., Profile]
    ) -> None:
        volunteer = make_profile(Role.VOLUNTEER)
        await _signed_in(app_session, fake_auth, fake_profiles, volunteer)
        app_session.select_profile(volunteer.id)

        with pytest.raises(RoleMismatchError):
            require_role(Role.FARMER)(app_session)
        with pytest.raises(RoleMismatchError):
            get_farm_id(app_session)

    @pytest.mark.asyncio
    async def test_accessors(
        self, app_session: AppSession, fake_auth, fake_profiles, make_profile: Callable[..., Profile]
    ) -> None:
        farmer = make_profile(Role.FARMER)
        center = make_profile(Role.CENTER)
        volunteer = make_profile(Role.VOLUNTEER)
        await _signed_in(app_session, fake_auth, fake_profiles, farmer, center, volunteer)

        app_session.select_profile(farmer.id)
        assert require_role(Role.FARMER)(app_session) == farmer
        assert get_farm_id(app_session) == farmer.farm_id

        app_session.select_profile(center.id)
        assert get_center_id(app_session) == center.center_id

        app_session.select_profile(volunteer.id)
        assert get_volunteer_name(app_session) == "Jamie"

    @pytest.mark.asyncio
    async def test_incomplete_profile(
        self, app_session: AppSession, fake_auth, fake_profiles, make_profile: Callable[..., Profile]
    ) -> None:
        farmer = make_profile(Role.FARMER, farm_id=None)
        await _signed_in(app_session, fake_auth, fake_profiles, farmer)
        app_session.select_profile(farmer.id)

        with pytest.raises(IncompleteProfileError):
            get_farm_id(app_session)
