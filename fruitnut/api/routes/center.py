"""Donation center screen API routes."""

from uuid import UUID

from fastapi import APIRouter

from fruitnut.api.deps import CenterId, CenterProfile
from fruitnut.schemas.center import CenterResponse, CenterUpdate
from fruitnut.schemas.donation import DonationResponse
from fruitnut.schemas.profile import Profile
from fruitnut.schemas.report import CenterReport
from fruitnut.services.center_service import CenterService
from fruitnut.services.donation_service import DonationService
from fruitnut.services.report_service import ReportService

router = APIRouter(prefix="/center", tags=["center"])


@router.get("", response_model=Profile, summary="Center home")
async def center_home(profile: CenterProfile) -> Profile:
    return profile


@router.get(
    "/assignments",
    response_model=list[DonationResponse],
    summary="Pending assignments",
    description="Pending donations assigned to the active center, latest date first.",
)
async def list_assignments(center_id: CenterId) -> list[DonationResponse]:
    return await DonationService().list_pending_for_center(center_id)


@router.post(
    "/assignments/{donation_id}/complete",
    response_model=DonationResponse,
    summary="Complete an assignment",
    responses={
        404: {"description": "Donation not assigned to this center"},
        409: {"description": "Donation was nullified"},
    },
)
async def complete_assignment(donation_id: UUID, center_id: CenterId) -> DonationResponse:
    donation = await DonationService().complete_assignment(center_id, donation_id)
    return DonationResponse(**donation)


@router.get("/reports", response_model=CenterReport, summary="Center report")
async def center_report(center_id: CenterId) -> CenterReport:
    return await ReportService().center_report(center_id)


@router.get("/profile", response_model=CenterResponse, summary="Center profile")
async def get_center_profile(center_id: CenterId) -> CenterResponse:
    center = await CenterService().get_center(center_id)
    return CenterResponse(**{**center, "accepted_fruits": center.get("accepted_fruits") or []})


@router.put("/profile", response_model=CenterResponse, summary="Update center profile")
async def update_center_profile(data: CenterUpdate, center_id: CenterId) -> CenterResponse:
    """Update the active center's details, capacity and opening hours.

    Args:
        data: Fields to update.
        center_id: Center of the active center profile.

    Returns:
        CenterResponse: The updated center.
    """
    center = await CenterService().update_center(center_id, data)
    return CenterResponse(**{**center, "accepted_fruits": center.get("accepted_fruits") or []})
