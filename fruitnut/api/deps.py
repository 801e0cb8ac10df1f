"""FastAPI dependency injection functions."""

from typing import Annotated, Callable
from uuid import UUID

from fastapi import Depends, Request

from fruitnut.api.middleware.error_handler import AuthenticationError
from fruitnut.schemas.auth import Identity
from fruitnut.schemas.profile import Profile, Role
from fruitnut.state.app_session import AppSession
from fruitnut.state.navigation import MemoryRouter


def get_app_session(request: Request) -> AppSession:
    """Get the app session created at startup.

    Args:
        request: FastAPI request object.

    Returns:
        AppSession: The session of this app instance.
    """
    return request.app.state.app_session


def get_router(request: Request) -> MemoryRouter:
    """Get the router tracking the current screen."""
    return request.app.state.router


AppSessionDep = Annotated[AppSession, Depends(get_app_session)]
RouterDep = Annotated[MemoryRouter, Depends(get_router)]


async def get_current_identity(session: AppSessionDep) -> Identity:
    """Get the signed-in identity.

    Raises:
        AuthenticationError: If nobody is signed in.
    """
    if session.identity is None:
        raise AuthenticationError("Please sign in to continue.")
    return session.identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def require_role(role: Role) -> Callable[[AppSession], Profile]:
    """Build a dependency returning the active profile of the given role.

    Args:
        role: Role the screen belongs to.

    Returns:
        Callable: Dependency raising NoActiveProfileError / RoleMismatchError
        when the active profile does not fit.
    """

    def dependency(session: AppSessionDep) -> Profile:
        return session.selector.require(role)

    return dependency


FarmerProfile = Annotated[Profile, Depends(require_role(Role.FARMER))]
VolunteerProfile = Annotated[Profile, Depends(require_role(Role.VOLUNTEER))]
CenterProfile = Annotated[Profile, Depends(require_role(Role.CENTER))]


def get_farm_id(session: AppSessionDep) -> UUID:
    """Farm of the active farmer profile."""
    return session.selector.farm_id


def get_center_id(session: AppSessionDep) -> UUID:
    """Donation center of the active center profile."""
    return session.selector.center_id


def get_volunteer_name(session: AppSessionDep) -> str:
    """Volunteer name of the active volunteer profile."""
    return session.selector.volunteer_name


FarmId = Annotated[UUID, Depends(get_farm_id)]
CenterId = Annotated[UUID, Depends(get_center_id)]
VolunteerName = Annotated[str, Depends(get_volunteer_name)]
