"""App session API routes.

These routes are not subject to the navigation guard: they are how a
client learns where it stands and acts on the session from any screen.
"""

from fastapi import APIRouter, status

from fruitnut.api.deps import AppSessionDep, CurrentIdentity, RouterDep
from fruitnut.api.middleware.error_handler import AuthenticationError
from fruitnut.core.auth_provider import AuthProviderError
from fruitnut.schemas.auth import Identity
from fruitnut.schemas.common import MessageResponse
from fruitnut.schemas.session import SelectProfileRequest, SessionSnapshot
from fruitnut.services.auth_service import AuthService

router = APIRouter(prefix="/session", tags=["session"])


@router.get(
    "",
    response_model=SessionSnapshot,
    summary="Get session state",
    description="Returns the identity, profiles, active profile and current screen.",
)
async def get_session(session: AppSessionDep, nav: RouterDep) -> SessionSnapshot:
    return session.snapshot(nav.current_path)


@router.post(
    "/active-profile",
    response_model=SessionSnapshot,
    summary="Select active profile",
    description="Makes one of the signed-in user's profiles active. The app moves to its role screen.",
    responses={
        401: {"description": "Not signed in"},
        404: {"description": "Profile is not one of the user's profiles"},
    },
)
async def select_active_profile(
    data: SelectProfileRequest,
    session: AppSessionDep,
    nav: RouterDep,
    identity: CurrentIdentity,
) -> SessionSnapshot:
    """Select the active profile.

    Args:
        data: The profile to activate.
        session: The app session.
        nav: Router tracking the current screen.
        identity: The signed-in identity.

    Returns:
        SessionSnapshot: State after the selection; route is the role screen.
    """
    session.select_profile(data.profile_id)
    return session.snapshot(nav.current_path)


@router.delete(
    "/active-profile",
    response_model=SessionSnapshot,
    summary="Clear active profile",
    description="Leaves the current role. The app moves back to the role picker.",
)
async def clear_active_profile(
    session: AppSessionDep,
    nav: RouterDep,
    identity: CurrentIdentity,
) -> SessionSnapshot:
    session.select_profile(None)
    return session.snapshot(nav.current_path)


@router.post(
    "/profiles/refresh",
    response_model=SessionSnapshot,
    summary="Reload profiles",
    description="Reloads the signed-in user's profiles, e.g. after a failed load.",
)
async def refresh_profiles(
    session: AppSessionDep,
    nav: RouterDep,
    identity: CurrentIdentity,
) -> SessionSnapshot:
    await session.refresh_profiles()
    return session.snapshot(nav.current_path)


@router.post(
    "/sign-out",
    response_model=MessageResponse,
    summary="Sign out",
    description="Ends the session. Local state is cleared even if the provider call fails.",
)
async def sign_out(session: AppSessionDep) -> MessageResponse:
    result = await AuthService(session).sign_out()
    return MessageResponse(**result)


@router.post(
    "/refresh-token",
    response_model=Identity,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    responses={401: {"description": "No session to refresh"}},
)
async def refresh_token(session: AppSessionDep) -> Identity:
    """Refresh the provider session.

    Args:
        session: The app session.

    Returns:
        Identity: The identity of the refreshed session.

    Raises:
        AuthenticationError: If there is no session to refresh.
    """
    try:
        identity = await session.refresh_token()
    except AuthProviderError as e:
        raise AuthenticationError(e.message) from e

    if identity is None:
        raise AuthenticationError("Session expired. Please sign in again.")
    return identity
