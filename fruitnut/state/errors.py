"""Errors raised by the session, profile and navigation state."""


class NoActiveProfileError(Exception):
    """Raised when a screen needs the active profile but none is selected."""

    def __init__(self, message: str = "No active profile selected") -> None:
        self.message = message
        super().__init__(message)


class RoleMismatchError(Exception):
    """Raised when the active profile has a different role than required."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        self.message = f"Active profile is a {actual} profile, {expected} required"
        super().__init__(self.message)


class IncompleteProfileError(Exception):
    """Raised when a profile lacks the linkage its role requires."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProfileNotFoundError(Exception):
    """Raised when selecting a profile that is not in the registry."""

    def __init__(self, message: str = "Profile not found for the signed-in user") -> None:
        self.message = message
        super().__init__(message)


class RouteConfigError(Exception):
    """A role has no screen route. Programming error, never recovered."""
