"""Navigation guard deciding which screen a user must be on.

The decision is a pure function of the session state and the current
route. NavigationGuard binds it to a router and re-runs it on every state
change.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from fruitnut.schemas.profile import Role
from fruitnut.state.errors import RouteConfigError

logger = logging.getLogger(__name__)

AUTH_SEGMENT = "auth"
ROLE_PICKER_SEGMENT = "home"

SIGN_IN_ROUTE = "/auth/sign-in"
SIGN_UP_ROUTE = "/auth/sign-up"
ROLE_SETUP_ROUTE = "/auth/role-setup"
PROFILES_UNAVAILABLE_ROUTE = "/auth/profiles-unavailable"
ROLE_PICKER_ROUTE = "/home"

ROLE_ROUTES: dict[Role, str] = {
    Role.FARMER: "/farmer",
    Role.VOLUNTEER: "/volunteer",
    Role.CENTER: "/center",
}


class NavigationPhase(str, Enum):
    """Where the user stands, derived from the session state."""

    BOOTING = "booting"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NO_PROFILES = "authenticated_no_profiles"
    AUTHENTICATED_PICKING_ROLE = "authenticated_picking_role"
    AUTHENTICATED_IN_ROLE = "authenticated_in_role"


@dataclass(frozen=True)
class NavigationInput:
    """Inputs of the guard decision."""

    is_loading: bool
    has_identity: bool
    active_role: Role | None
    profile_count: int
    route: str
    profile_load_failed: bool = False

    @property
    def segment(self) -> str:
        return route_segment(self.route)


def route_segment(path: str) -> str:
    """Return the top-level segment of a path ("/farmer/shifts" -> "farmer")."""
    return path.strip("/").split("/", 1)[0]


def role_route(role: Role) -> str:
    """Return the screen route of a role.

    Raises:
        RouteConfigError: If the role has no route.
    """
    try:
        return ROLE_ROUTES[role]
    except KeyError:
        raise RouteConfigError(f"No route configured for role {role!r}") from None


def classify(state: NavigationInput) -> NavigationPhase:
    if state.is_loading:
        return NavigationPhase.BOOTING
    if not state.has_identity:
        return NavigationPhase.UNAUTHENTICATED
    if state.active_role is not None:
        return NavigationPhase.AUTHENTICATED_IN_ROLE
    if state.profile_count == 0:
        return NavigationPhase.AUTHENTICATED_NO_PROFILES
    return NavigationPhase.AUTHENTICATED_PICKING_ROLE


def resolve_redirect(state: NavigationInput) -> str | None:
    """Compute the route the user must be sent to.

    Args:
        state: Current session state and route.

    Returns:
        str | None: Target route, or None when the user is already in
        the right place (or the session is still loading).
    """
    if state.is_loading:
        return None

    segment = state.segment
    in_auth_area = segment == AUTH_SEGMENT

    if not state.has_identity:
        return None if in_auth_area else SIGN_IN_ROUTE

    if state.active_role is None:
        if in_auth_area:
            return None
        if state.profile_count == 0:
            # A failed load must not send the user into creating duplicate roles
            if state.profile_load_failed:
                return PROFILES_UNAVAILABLE_ROUTE
            return ROLE_SETUP_ROUTE
        if segment != ROLE_PICKER_SEGMENT:
            return ROLE_PICKER_ROUTE
        return None

    target = role_route(state.active_role)
    if segment != route_segment(target):
        return target
    return None


class Router(Protocol):
    """Routing primitive of the presentation layer."""

    @property
    def current_path(self) -> str: ...

    def replace(self, path: str) -> None: ...

    def push(self, path: str) -> None: ...


class MemoryRouter:
    """Router keeping its history in memory."""

    def __init__(self, initial_path: str = "/") -> None:
        self._history: list[str] = [initial_path]

    @property
    def current_path(self) -> str:
        return self._history[-1]

    @property
    def current_segment(self) -> str:
        return route_segment(self.current_path)

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def replace(self, path: str) -> None:
        if path == self.current_path:
            return
        self._history[-1] = path

    def push(self, path: str) -> None:
        if path == self.current_path:
            return
        self._history.append(path)


class NavigationSource(Protocol):
    """State the guard observes."""

    def navigation_input(self, route: str) -> NavigationInput: ...

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]: ...


class NavigationGuard:
    """Re-evaluates the redirect decision on every state change."""

    def __init__(self, source: NavigationSource, router: Router) -> None:
        self._source = source
        self._router = router
        self._unsubscribe: Callable[[], None] | None = None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._source.subscribe(self.evaluate)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def evaluate(self) -> str | None:
        """Redirect the router if the current route is not allowed.

        Returns:
            str | None: The route redirected to, if any.
        """
        current = self._router.current_path
        target = resolve_redirect(self._source.navigation_input(current))
        if target is not None:
            logger.info("Redirecting %s -> %s", current, target)
            self._router.replace(target)
        return target
