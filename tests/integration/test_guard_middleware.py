"""Integration tests for the navigation guard middleware."""

from collections.abc import Callable
from unittest.mock import PropertyMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from fruitnut.schemas.profile import Profile, Role
from fruitnut.state.app_session import AppSession


class TestSignedOut:
    """Guard decisions without a signed-in user."""

    @pytest.mark.parametrize("path", ["/farmer", "/volunteer/shifts", "/center/reports", "/home", "/"])
    def test_screens_redirect_to_sign_in(self, client: TestClient, path: str) -> None:
        response = client.get(path)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/sign-in"

    @pytest.mark.parametrize("path", ["/auth/sign-in", "/auth/sign-up"])
    def test_auth_screens_allowed(self, client: TestClient, path: str) -> None:
        response = client.get(path)

        assert response.status_code == 200
        assert response.json()["route"] == path

    def test_session_endpoint_not_guarded(self, client: TestClient) -> None:
        response = client.get("/session")

        assert response.status_code == 200

    def test_allowed_request_updates_route(self, client: TestClient) -> None:
        client.get("/auth/sign-up")

        assert client.get("/session").json()["route"] == "/auth/sign-up"


class TestLoading:
    """Guard behavior while the session loads."""

    def test_loading_returns_503(self, client: TestClient) -> None:
        with patch.object(AppSession, "is_loading", new_callable=PropertyMock, return_value=True):
            response = client.get("/farmer")

        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert response.json()["status"] == "loading"

    def test_health_answers_while_loading(self, client: TestClient) -> None:
        with patch.object(AppSession, "is_loading", new_callable=PropertyMock, return_value=True):
            response = client.get("/health")

        assert response.status_code == 200


class TestSignedIn:
    """Guard decisions for a signed-in user."""

    def test_no_profiles_goes_to_role_setup(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        sign_in_as()

        response = client.get("/home")

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/role-setup"

    def test_profiles_without_selection_go_to_picker(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        sign_in_as(Role.FARMER, Role.VOLUNTEER, activate=False)

        response = client.get("/farmer")

        assert response.status_code == 303
        assert response.headers["location"] == "/home"

    def test_picker_is_shown(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        sign_in_as(Role.FARMER, Role.VOLUNTEER, activate=False)

        response = client.get("/home")

        assert response.status_code == 200
        assert len(response.json()["profiles"]) == 2

    def test_other_role_area_redirects_to_active_role(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        sign_in_as(Role.VOLUNTEER, Role.FARMER)

        response = client.get("/farmer/shifts")

        assert response.status_code == 303
        assert response.headers["location"] == "/volunteer"

    def test_active_role_area_allowed(self, client: TestClient, sign_in_as: Callable[..., list[Profile]]) -> None:
        volunteer, _ = sign_in_as(Role.VOLUNTEER, Role.FARMER)

        response = client.get("/volunteer")

        assert response.status_code == 200
        assert response.json()["id"] == str(volunteer.id)

    def test_auth_area_redirects_active_role(
        self, client: TestClient, sign_in_as: Callable[..., list[Profile]]
    ) -> None:
        sign_in_as(Role.CENTER)

        response = client.get("/auth/sign-in")

        assert response.status_code == 303
        assert response.headers["location"] == "/center"

    def test_failed_load_goes_to_profiles_unavailable(
        self, client: TestClient, fake_auth, fake_profiles
    ) -> None:
        fake_auth.register("user@example.com")
        fake_profiles.error = httpx.ConnectTimeout("timed out")
        client.post("/auth/sign-in", json={"email": "user@example.com", "password": "secret123"})

        response = client.get("/home")

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/profiles-unavailable"

        screen = client.get("/auth/profiles-unavailable")
        assert screen.status_code == 200
        assert "timed out" in screen.json()["message"]
