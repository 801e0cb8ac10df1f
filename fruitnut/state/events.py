"""Auth events and the change notification mechanism of the app session."""

import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class AuthEvent(str, Enum):
    """Auth state changes delivered by the auth provider."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class StateEmitter:
    """Synchronous observer list.

    Listeners are called in subscription order on every emit. Exceptions
    raised by a listener propagate to the code that changed the state.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable invoked with no arguments after each change.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self) -> None:
        """Notify every listener of a state change."""
        for listener in list(self._listeners):
            listener()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
