"""Integration tests for the volunteer screen endpoints."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from fruitnut.api.middleware.error_handler import ConflictError
from fruitnut.schemas.profile import Profile, Role

SHIFT_ID = "330e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def volunteer(sign_in_as: Callable[..., list[Profile]]) -> Profile:
    """Sign in with an active volunteer profile."""
    return sign_in_as(Role.VOLUNTEER)[0]


class TestOpenShifts:
    """Tests for GET /volunteer/shifts."""

    def test_lists_active_and_full_shifts(
        self, client: TestClient, volunteer: Profile, mock_supabase_client: MagicMock
    ) -> None:
        mock_response = MagicMock()
        mock_response.data = [
            {
                "id": SHIFT_ID,
                "date": "2024-06-01",
                "time": "8-12",
                "fruit": "Apples",
                "volunteer_limit": 5,
                "status": "full",
                "shift_signups": [{"count": 5}],
                "farms": {"name": "Green Acres"},
            }
        ]
        mock_supabase_client.table.return_value.select.return_value.in_.return_value.order.return_value.execute.return_value = (
            mock_response
        )

        response = client.get("/volunteer/shifts")

        assert response.status_code == 200
        data = response.json()
        assert data[0]["farm_name"] == "Green Acres"
        assert data[0]["status"] == "full"


class TestShiftSignup:
    """Tests for POST /volunteer/shifts/{id}/signup."""

    def test_signs_up_with_volunteer_name(self, client: TestClient, volunteer: Profile) -> None:
        with patch("fruitnut.api.routes.volunteer.ShiftService") as service_cls:
            service_cls.return_value.sign_up = AsyncMock(
                return_value={
                    "shift_id": SHIFT_ID,
                    "volunteer_name": "Jamie",
                    "shift_full": False,
                    "message": "You're signed up for Apples on 2024-06-01.",
                }
            )
            response = client.post(f"/volunteer/shifts/{SHIFT_ID}/signup")

        assert response.status_code == 201
        service_cls.return_value.sign_up.assert_awaited_once()
        assert service_cls.return_value.sign_up.call_args[0][1] == "Jamie"

    def test_full_shift(self, client: TestClient, volunteer: Profile) -> None:
        with patch("fruitnut.api.routes.volunteer.ShiftService") as service_cls:
            service_cls.return_value.sign_up = AsyncMock(side_effect=ConflictError("This shift is already full."))
            response = client.post(f"/volunteer/shifts/{SHIFT_ID}/signup")

        assert response.status_code == 409
        assert response.json()["message"] == "This shift is already full."


class TestContributions:
    """Tests for GET /volunteer/donations."""

    def test_contributions(self, client: TestClient, volunteer: Profile, mock_supabase_client: MagicMock) -> None:
        mock_response = MagicMock()
        mock_response.data = []
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.eq.return_value.execute.return_value = (
            mock_response
        )

        response = client.get("/volunteer/donations")

        assert response.status_code == 200
        assert response.json() == {"contributions": [], "total_picked_lbs": 0, "total_donated_lbs": 0}


class TestWaiver:
    """Tests for the waiver endpoints."""

    def test_must_agree(self, client: TestClient, volunteer: Profile) -> None:
        response = client.post("/volunteer/waiver", json={"agreed": False})

        assert response.status_code == 422
        assert response.json()["message"] == "Please agree to the waiver to continue."

    def test_sign_reloads_profile(self, client: TestClient, volunteer: Profile, fake_profiles) -> None:
        signed = volunteer.model_copy(update={"waiver_agreed": True})

        async def sign_waiver(profile_id):
            fake_profiles.by_user[volunteer.user_id] = [signed]
            return signed

        with patch("fruitnut.api.routes.volunteer.ProfileService") as service_cls:
            service_cls.return_value.sign_waiver = AsyncMock(side_effect=sign_waiver)
            response = client.post("/volunteer/waiver", json={"agreed": True})

        assert response.status_code == 200
        assert response.json()["waiver_agreed"] is True
        assert client.get("/session").json()["active_profile"]["waiver_agreed"] is True

    def test_already_signed(self, client: TestClient, fake_auth, fake_profiles, make_profile) -> None:
        fake_auth.register("user@example.com")
        signed = fake_profiles.add(make_profile(Role.VOLUNTEER, waiver_agreed=True))
        client.post("/auth/sign-in", json={"email": "user@example.com", "password": "secret123"})
        client.post("/session/active-profile", json={"profile_id": str(signed.id)})

        with patch("fruitnut.api.routes.volunteer.ProfileService") as service_cls:
            service_cls.return_value.sign_waiver = AsyncMock()
            response = client.post("/volunteer/waiver", json={"agreed": True})

        assert response.status_code == 200
        assert response.json()["waiver_agreed"] is True
        service_cls.return_value.sign_waiver.assert_not_awaited()


class TestVolunteerProfile:
    """Tests for the volunteer profile endpoints."""

    def test_blank_name(self, client: TestClient, volunteer: Profile) -> None:
        response = client.put("/volunteer/profile", json={"volunteer_name": "   "})

        assert response.status_code == 422

    def test_update_reloads_profile(self, client: TestClient, volunteer: Profile, fake_profiles) -> None:
        renamed = volunteer.model_copy(update={"volunteer_name": "Robin"})

        async def update(profile_id, data):
            fake_profiles.by_user[volunteer.user_id] = [renamed]
            return renamed

        with patch("fruitnut.api.routes.volunteer.ProfileService") as service_cls:
            service_cls.return_value.update_volunteer_profile = AsyncMock(side_effect=update)
            response = client.put("/volunteer/profile", json={"volunteer_name": "Robin"})

        assert response.status_code == 200
        assert response.json()["volunteer_name"] == "Robin"
        assert client.get("/session").json()["active_profile"]["volunteer_name"] == "Robin"

    def test_failed_reload_returns_written_row(self, client: TestClient, volunteer: Profile, fake_profiles) -> None:
        renamed = volunteer.model_copy(update={"volunteer_name": "Robin"})
        fake_profiles.error = httpx.ConnectTimeout("timed out")

        with patch("fruitnut.api.routes.volunteer.ProfileService") as service_cls:
            service_cls.return_value.update_volunteer_profile = AsyncMock(return_value=renamed)
            response = client.put("/volunteer/profile", json={"volunteer_name": "Robin"})

        assert response.status_code == 200
        assert response.json()["volunteer_name"] == "Robin"
        session = client.get("/session").json()
        assert session["profile_load_status"] == "failed"
        assert session["active_profile"]["volunteer_name"] == "Jamie"
