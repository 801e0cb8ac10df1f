"""Authentication and role setup API routes (the auth screen area)."""

import logging

from fastapi import APIRouter, status

from fruitnut.api.deps import AppSessionDep, CurrentIdentity, RouterDep
from fruitnut.schemas.auth import AuthResponse, SignInRequest, SignUpRequest
from fruitnut.schemas.center import CenterSummary
from fruitnut.schemas.common import ScreenResponse
from fruitnut.schemas.role_setup import RoleSetupOptions, RoleSetupRequest, RoleSetupResponse
from fruitnut.services.auth_service import AuthService
from fruitnut.services.center_service import CenterService
from fruitnut.services.profile_service import ProfileService
from fruitnut.services.role_setup_service import RoleSetupService
from fruitnut.state.navigation import (
    PROFILES_UNAVAILABLE_ROUTE,
    SIGN_IN_ROUTE,
    SIGN_UP_ROUTE,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/sign-in", response_model=ScreenResponse, summary="Sign in screen")
async def sign_in_screen() -> ScreenResponse:
    return ScreenResponse(route=SIGN_IN_ROUTE, title="Sign In")


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    summary="Sign in",
    description="Sign in with email and password. next_route is role setup or the role picker.",
    responses={
        401: {"description": "Invalid credentials"},
        422: {"description": "Email or password missing"},
    },
)
async def sign_in(data: SignInRequest, session: AppSessionDep, nav: RouterDep) -> AuthResponse:
    """Sign in with email and password.

    The profiles of the user are loaded before this returns, so
    next_route already reflects them. The app moves to next_route.

    Args:
        data: Sign in form.
        session: The app session.
        nav: Router tracking the current screen.

    Returns:
        AuthResponse: The signed-in user and the next screen.
    """
    result = await AuthService(session).sign_in(data.email, data.password)
    nav.replace(result["next_route"])
    return AuthResponse(**result)


@router.get("/sign-up", response_model=ScreenResponse, summary="Sign up screen")
async def sign_up_screen() -> ScreenResponse:
    return ScreenResponse(route=SIGN_UP_ROUTE, title="Create Account")


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account. Without email confirmation the user is signed in right away.",
    responses={
        401: {"description": "Account refused by the auth provider"},
        422: {"description": "Form incomplete or passwords do not match"},
    },
)
async def sign_up(data: SignUpRequest, session: AppSessionDep, nav: RouterDep) -> AuthResponse:
    result = await AuthService(session).sign_up(data.email, data.password, data.confirm_password)
    if result["signed_in"]:
        nav.replace(result["next_route"])
    return AuthResponse(**result)


@router.get(
    "/role-setup",
    response_model=RoleSetupOptions,
    summary="Role setup screen",
    description="Lists the donation centers a center profile can join and the roles the user already has.",
)
async def role_setup_options(identity: CurrentIdentity) -> RoleSetupOptions:
    centers = await CenterService().list_centers()
    existing = await ProfileService().get_roles(identity.id)
    return RoleSetupOptions(
        centers=[CenterSummary(**center) for center in centers],
        existing_roles=sorted(existing, key=lambda role: role.value),
    )


@router.post(
    "/role-setup",
    response_model=RoleSetupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Complete role setup",
    description="Creates a profile for each selected role, then reloads the user's profiles.",
    responses={
        401: {"description": "Not signed in"},
        409: {"description": "User already has one of the selected roles"},
        422: {"description": "Required field missing"},
    },
)
async def complete_role_setup(
    data: RoleSetupRequest,
    session: AppSessionDep,
    nav: RouterDep,
    identity: CurrentIdentity,
) -> RoleSetupResponse:
    """Complete role setup for the signed-in user.

    The profiles are reloaded whether or not every role was written, so
    profiles created before a failure reach the session.

    Args:
        data: Selected roles and their details.
        session: The app session.
        nav: Router tracking the current screen.
        identity: The signed-in identity.

    Returns:
        RoleSetupResponse: Created profiles and the next screen (role picker).
    """
    try:
        created = await RoleSetupService().complete(identity.id, data)
    finally:
        await session.refresh_profiles()

    next_route = session.landing_route()
    nav.replace(next_route)
    return RoleSetupResponse(created=created, next_route=next_route)


@router.get(
    "/profiles-unavailable",
    response_model=ScreenResponse,
    summary="Profiles unavailable screen",
    description="Shown when the user's profiles could not be loaded. Retry via POST /session/profiles/refresh.",
)
async def profiles_unavailable(session: AppSessionDep) -> ScreenResponse:
    error = session.registry.error
    return ScreenResponse(
        route=PROFILES_UNAVAILABLE_ROUTE,
        title="Profiles Unavailable",
        message=f"We couldn't load your profiles: {error}" if error else "We couldn't load your profiles.",
    )
