"""Integration tests for the /session endpoints."""

from collections.abc import Callable
from unittest.mock import patch
from uuid import uuid4

import httpx
from fastapi.testclient import TestClient

from fruitnut.schemas.profile import Profile, Role


class TestGetSession:
    """Tests for GET /session."""

    def test_signed_out_session(self, client: TestClient) -> None:
        """Test that a fresh instance starts signed out on the sign in screen."""
        response = client.get("/session")

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "unauthenticated"
        assert data["is_loading"] is False
        assert data["identity"] is None
        assert data["profiles"] == []
        assert data["route"] == "/auth/sign-in"

    def test_restored_session(self, fake_auth, fake_profiles, make_profile, mock_supabase_client) -> None:
        """Test that a persisted session is restored at startup with its profiles."""
        identity = fake_auth.register("user@example.com")
        fake_auth.current = identity
        fake_profiles.add(make_profile(Role.FARMER))
        fake_profiles.add(make_profile(Role.VOLUNTEER))

        with (
            patch("fruitnut.main.SupabaseAuthProvider", return_value=fake_auth),
            patch("fruitnut.main.ProfileService", return_value=fake_profiles),
        ):
            from fruitnut.main import app

            with TestClient(app, follow_redirects=False) as test_client:
                data = test_client.get("/session").json()

        assert data["phase"] == "authenticated_picking_role"
        assert data["identity"]["email"] == "user@example.com"
        assert len(data["profiles"]) == 2
        assert data["route"] == "/home"


class TestActiveProfile:
    """Tests for selecting and clearing the active profile."""

    def test_select_moves_to_role_screen(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        farmer, _ = sign_in_as(Role.FARMER, Role.CENTER, activate=False)

        response = client.post("/session/active-profile", json={"profile_id": str(farmer.id)})

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "authenticated_in_role"
        assert data["active_profile"]["id"] == str(farmer.id)
        assert data["route"] == "/farmer"

    def test_switching_role(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        _, center = sign_in_as(Role.FARMER, Role.CENTER)

        response = client.post("/session/active-profile", json={"profile_id": str(center.id)})

        assert response.json()["route"] == "/center"

    def test_clear_returns_to_picker(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        sign_in_as(Role.VOLUNTEER)

        response = client.delete("/session/active-profile")

        assert response.status_code == 200
        data = response.json()
        assert data["active_profile"] is None
        assert data["route"] == "/home"

    def test_unknown_profile(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        sign_in_as(Role.FARMER, activate=False)

        response = client.post("/session/active-profile", json={"profile_id": str(uuid4())})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_requires_sign_in(self, client: TestClient) -> None:
        response = client.post("/session/active-profile", json={"profile_id": str(uuid4())})

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_error"


class TestRefreshProfiles:
    """Tests for POST /session/profiles/refresh."""

    def test_recovers_from_failed_load(
        self, client: TestClient, fake_auth, fake_profiles, make_profile
    ) -> None:
        fake_auth.register("user@example.com")
        fake_profiles.error = httpx.ConnectTimeout("timed out")
        client.post("/auth/sign-in", json={"email": "user@example.com", "password": "secret123"})
        assert client.get("/session").json()["profile_load_status"] == "failed"

        fake_profiles.error = None
        fake_profiles.add(make_profile(Role.FARMER))
        response = client.post("/session/profiles/refresh")

        data = response.json()
        assert data["profile_load_status"] == "loaded"
        assert len(data["profiles"]) == 1


class TestSignOut:
    """Tests for POST /session/sign-out."""

    def test_sign_out_clears_session(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        sign_in_as(Role.FARMER)

        response = client.post("/session/sign-out")

        assert response.status_code == 200
        data = client.get("/session").json()
        assert data["identity"] is None
        assert data["active_profile"] is None
        assert data["profiles"] == []
        assert data["route"] == "/auth/sign-in"


class TestRefreshToken:
    """Tests for POST /session/refresh-token."""

    def test_refreshes_signed_in_session(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        sign_in_as(Role.FARMER)

        response = client.post("/session/refresh-token")

        assert response.status_code == 200
        assert response.json()["email"] == "user@example.com"
        assert client.get("/session").json()["active_profile"] is not None

    def test_no_session(self, client: TestClient) -> None:
        response = client.post("/session/refresh-token")

        assert response.status_code == 401
