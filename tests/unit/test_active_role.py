"""Unit tests for ActiveRoleSelector."""

from collections.abc import Callable
from uuid import uuid4

import pytest

from fruitnut.schemas.profile import Profile, Role
from fruitnut.state.active_role import ActiveRoleSelector
from fruitnut.state.errors import IncompleteProfileError, NoActiveProfileError, RoleMismatchError


class TestSelection:
    """Tests for select / clear / revalidate."""

    def test_starts_empty(self) -> None:
        selector = ActiveRoleSelector()

        assert selector.active is None
        assert selector.role is None

    def test_select_and_clear(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        farmer = make_profile(Role.FARMER)

        selector.select(farmer)
        assert selector.role == Role.FARMER

        selector.clear()
        assert selector.active is None

    def test_revalidate_keeps_profile_still_present(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        volunteer = make_profile(Role.VOLUNTEER)
        selector.select(volunteer)

        renamed = volunteer.model_copy(update={"volunteer_name": "Sam"})
        cleared = selector.revalidate([make_profile(Role.FARMER), renamed])

        assert cleared is False
        assert selector.active is not None
        assert selector.active.volunteer_name == "Sam"

    def test_revalidate_clears_missing_profile(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.CENTER))

        cleared = selector.revalidate([make_profile(Role.CENTER)])

        assert cleared is True
        assert selector.active is None

    def test_revalidate_is_idempotent(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.CENTER))
        profiles = [make_profile(Role.FARMER)]

        selector.revalidate(profiles)
        selector.revalidate(profiles)

        assert selector.active is None


class TestAccessors:
    """Tests for the role-specific accessors."""

    def test_require_without_selection_raises(self) -> None:
        with pytest.raises(NoActiveProfileError):
            ActiveRoleSelector().require()

    def test_require_wrong_role_raises(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.VOLUNTEER))

        with pytest.raises(RoleMismatchError) as exc_info:
            selector.require(Role.FARMER)

        assert exc_info.value.expected == "farmer"
        assert exc_info.value.actual == "volunteer"

    def test_farm_id(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        farm_id = uuid4()
        selector.select(make_profile(Role.FARMER, farm_id=farm_id))

        assert selector.farm_id == farm_id

    def test_farm_id_missing_raises(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.FARMER, farm_id=None))

        with pytest.raises(IncompleteProfileError):
            _ = selector.farm_id

    def test_center_id_requires_center_role(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.FARMER))

        with pytest.raises(RoleMismatchError):
            _ = selector.center_id

    def test_volunteer_name(self, make_profile: Callable[..., Profile]) -> None:
        selector = ActiveRoleSelector()
        selector.select(make_profile(Role.VOLUNTEER, volunteer_name="Riley"))

        assert selector.volunteer_name == "Riley"

    def test_no_demo_fallback(self) -> None:
        """Accessors never fall back to placeholder values."""
        selector = ActiveRoleSelector()

        for accessor in ("farm_id", "center_id", "volunteer_name"):
            with pytest.raises(NoActiveProfileError):
                getattr(selector, accessor)
