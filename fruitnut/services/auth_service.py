"""Authentication business logic service."""

import logging
from typing import Any

from fruitnut.api.middleware.error_handler import AuthenticationError, ValidationError
from fruitnut.core.auth_provider import AuthProviderError
from fruitnut.core.config import get_settings
from fruitnut.state.app_session import AppSession
from fruitnut.state.navigation import SIGN_IN_ROUTE

logger = logging.getLogger(__name__)


class AuthService:
    """Validates the sign in / sign up forms and drives the app session."""

    def __init__(self, session: AppSession) -> None:
        """Initialize auth service.

        Args:
            session: The app session that owns the identity.
        """
        self.session = session
        self.settings = get_settings()

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Sign in with email and password.

        Args:
            email: User's email address.
            password: User's password.

        Returns:
            dict: Sign in response with user_id and the next route.

        Raises:
            ValidationError: If a field is blank.
            AuthenticationError: If the provider rejects the credentials.
        """
        email = email.strip()
        if not email or not password:
            raise ValidationError("Please enter your email and password.")

        try:
            identity = await self.session.sign_in(email, password)
        except AuthProviderError as e:
            logger.warning("Sign in failed: %s", e.message)
            raise AuthenticationError(self._friendly_message(e.message)) from e

        return {
            "user_id": str(identity.id),
            "email": identity.email or email,
            "signed_in": True,
            "next_route": self.session.landing_route(),
        }

    async def sign_up(self, email: str, password: str, confirm_password: str) -> dict[str, Any]:
        """Create an account with email and password.

        Args:
            email: User's email address.
            password: User's password.
            confirm_password: Password typed a second time.

        Returns:
            dict: Sign up response. next_route is the role setup screen when
            a session was opened, the sign in screen when the email still
            needs to be confirmed.

        Raises:
            ValidationError: If the form is incomplete or the passwords differ.
            AuthenticationError: If the provider refuses the account.
        """
        email = email.strip()
        if not email or not password or not confirm_password:
            raise ValidationError("Please fill in all fields.")
        if password != confirm_password:
            raise ValidationError("Passwords do not match.")
        if len(password) < self.settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.settings.min_password_length} characters."
            )

        try:
            identity = await self.session.sign_up(email, password)
        except AuthProviderError as e:
            logger.warning("Sign up failed: %s", e.message)
            raise AuthenticationError(self._friendly_message(e.message)) from e

        if identity is None:
            return {
                "user_id": None,
                "email": email,
                "signed_in": False,
                "next_route": SIGN_IN_ROUTE,
                "message": "Account created. Please check your email to verify your account.",
            }

        return {
            "user_id": str(identity.id),
            "email": identity.email or email,
            "signed_in": True,
            "next_route": self.session.landing_route(),
        }

    async def sign_out(self) -> dict[str, Any]:
        await self.session.sign_out()
        return {"message": "Signed out", "next_route": SIGN_IN_ROUTE}

    @staticmethod
    def _friendly_message(error_msg: str) -> str:
        lowered = error_msg.lower()
        if "invalid" in lowered and "credentials" in lowered:
            return "Invalid email or password"
        if "email not confirmed" in lowered or "not verified" in lowered:
            return "Please verify your email before signing in"
        if "already registered" in lowered or "already exists" in lowered:
            return "An account with this email already exists"
        return error_msg
