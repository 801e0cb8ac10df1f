"""Volunteer screen API routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from fruitnut.api.deps import AppSessionDep, VolunteerName, VolunteerProfile
from fruitnut.api.middleware.error_handler import ValidationError
from fruitnut.schemas.donation import ContributionsResponse
from fruitnut.schemas.profile import Profile, VolunteerProfileUpdate, WaiverSignRequest
from fruitnut.schemas.shift import ShiftResponse, ShiftSignupResponse
from fruitnut.services.donation_service import DonationService
from fruitnut.services.profile_service import ProfileService
from fruitnut.services.shift_service import ShiftService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/volunteer", tags=["volunteer"])


async def _reload_active(session: AppSessionDep, updated: Profile) -> Profile:
    """Reload the profiles after an edit and return the fresh active profile.

    When the reload fails the session still holds the old profile, so the
    row written by the edit is returned instead.
    """
    result = await session.refresh_profiles()
    if result is None or not result.ok:
        logger.warning("Profile reload after editing %s failed, returning the written row", updated.id)
        return updated
    return session.selector.require()


@router.get("", response_model=Profile, summary="Volunteer home")
async def volunteer_home(profile: VolunteerProfile) -> Profile:
    return profile


@router.get(
    "/shifts",
    response_model=list[ShiftResponse],
    summary="Browse shifts",
    description="Active and full shifts of all farms, with farm and center names.",
)
async def list_open_shifts(profile: VolunteerProfile) -> list[ShiftResponse]:
    return await ShiftService().list_open_shifts()


@router.post(
    "/shifts/{shift_id}/signup",
    response_model=ShiftSignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up for a shift",
    responses={
        404: {"description": "Shift not found"},
        409: {"description": "Shift full or cancelled, or already signed up"},
    },
)
async def sign_up_for_shift(shift_id: UUID, volunteer_name: VolunteerName) -> ShiftSignupResponse:
    return await ShiftService().sign_up(shift_id, volunteer_name)


@router.get(
    "/donations",
    response_model=ContributionsResponse,
    summary="My contributions",
    description="Harvest contributions logged for the active volunteer, with totals.",
)
async def list_contributions(volunteer_name: VolunteerName) -> ContributionsResponse:
    return await DonationService().list_contributions(volunteer_name)


@router.get("/profile", response_model=Profile, summary="Volunteer profile")
async def get_volunteer_profile(profile: VolunteerProfile) -> Profile:
    return profile


@router.put(
    "/profile",
    response_model=Profile,
    summary="Update volunteer profile",
    responses={422: {"description": "Name is blank"}},
)
async def update_volunteer_profile(
    data: VolunteerProfileUpdate,
    profile: VolunteerProfile,
    session: AppSessionDep,
) -> Profile:
    """Update the active volunteer's name and phone.

    Args:
        data: New name and phone.
        profile: The active volunteer profile.
        session: The app session, refreshed after the edit.

    Returns:
        Profile: The updated profile as now held by the session.
    """
    updated = await ProfileService().update_volunteer_profile(profile.id, data)
    return await _reload_active(session, updated)


@router.get("/waiver", response_model=Profile, summary="Waiver status")
async def get_waiver(profile: VolunteerProfile) -> Profile:
    return profile


@router.post(
    "/waiver",
    response_model=Profile,
    summary="Sign the waiver",
    responses={422: {"description": "Waiver not agreed to"}},
)
async def sign_waiver(
    data: WaiverSignRequest,
    profile: VolunteerProfile,
    session: AppSessionDep,
) -> Profile:
    if not data.agreed:
        raise ValidationError("Please agree to the waiver to continue.")
    if profile.waiver_agreed:
        return profile

    updated = await ProfileService().sign_waiver(profile.id)
    return await _reload_active(session, updated)
