"""Farmer screen API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from fruitnut.api.deps import FarmerProfile, FarmId
from fruitnut.models.donation import DonationStatus
from fruitnut.schemas.donation import DonationCreate, DonationResponse, DonationUpdate, NullifyRequest
from fruitnut.schemas.farm import FarmResponse, FarmUpdate
from fruitnut.schemas.profile import Profile
from fruitnut.schemas.report import FarmReport
from fruitnut.schemas.shift import ShiftCreate, ShiftResponse, ShiftSignupsResponse, ShiftUpdate
from fruitnut.services.donation_service import DonationService
from fruitnut.services.farm_service import FarmService
from fruitnut.services.report_service import ReportService
from fruitnut.services.shift_service import ShiftService

router = APIRouter(prefix="/farmer", tags=["farmer"])


@router.get("", response_model=Profile, summary="Farmer home")
async def farmer_home(profile: FarmerProfile) -> Profile:
    return profile


# Shifts


@router.get(
    "/shifts",
    response_model=list[ShiftResponse],
    summary="List farm shifts",
    description="Shifts of the active farm with signup counts and center names, newest first.",
)
async def list_shifts(farm_id: FarmId) -> list[ShiftResponse]:
    return await ShiftService().list_farm_shifts(farm_id)


@router.post(
    "/shifts",
    response_model=ShiftResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a shift",
)
async def create_shift(data: ShiftCreate, farm_id: FarmId) -> ShiftResponse:
    """Schedule a harvest shift on the active farm.

    Args:
        data: Shift details. The volunteer limit defaults to 10.
        farm_id: Farm of the active farmer profile.

    Returns:
        ShiftResponse: The created shift.
    """
    shift = await ShiftService().create_shift(farm_id, data)
    return ShiftResponse(**shift)


@router.put(
    "/shifts/{shift_id}",
    response_model=ShiftResponse,
    summary="Update a shift",
    responses={404: {"description": "Shift not found on this farm"}},
)
async def update_shift(shift_id: UUID, data: ShiftUpdate, farm_id: FarmId) -> ShiftResponse:
    shift = await ShiftService().update_shift(farm_id, shift_id, data)
    return ShiftResponse(**shift)


@router.delete(
    "/shifts/{shift_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a shift",
    responses={404: {"description": "Shift not found on this farm"}},
)
async def delete_shift(shift_id: UUID, farm_id: FarmId) -> None:
    await ShiftService().delete_shift(farm_id, shift_id)


@router.get(
    "/shifts/{shift_id}/signups",
    response_model=ShiftSignupsResponse,
    summary="List shift signups",
    description="Volunteers signed up for a shift with picked and donated totals.",
)
async def list_shift_signups(shift_id: UUID, farm_id: FarmId) -> ShiftSignupsResponse:
    return await ShiftService().list_signups(farm_id, shift_id)


# Donations


@router.get(
    "/donations",
    response_model=list[DonationResponse],
    summary="List farm donations",
)
async def list_donations(
    farm_id: FarmId,
    status_filter: DonationStatus | None = Query(default=None, alias="status", description="Only this status"),
) -> list[DonationResponse]:
    return await DonationService().list_farm_donations(farm_id, status_filter)


@router.post(
    "/donations",
    response_model=DonationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a donation",
)
async def log_donation(data: DonationCreate, farm_id: FarmId) -> DonationResponse:
    donation = await DonationService().log_donation(farm_id, data)
    return DonationResponse(**donation)


@router.put(
    "/donations/{donation_id}",
    response_model=DonationResponse,
    summary="Edit a donation",
    responses={
        404: {"description": "Donation not found on this farm"},
        409: {"description": "Donation was nullified"},
    },
)
async def update_donation(donation_id: UUID, data: DonationUpdate, farm_id: FarmId) -> DonationResponse:
    donation = await DonationService().update_donation(farm_id, donation_id, data)
    return DonationResponse(**donation)


@router.post(
    "/donations/{donation_id}/nullify",
    response_model=DonationResponse,
    summary="Nullify a donation",
    description="Voids a donation. It stays on record with the reason but leaves the center reports.",
    responses={409: {"description": "Donation already nullified"}},
)
async def nullify_donation(donation_id: UUID, data: NullifyRequest, farm_id: FarmId) -> DonationResponse:
    donation = await DonationService().nullify_donation(farm_id, donation_id, data.reason)
    return DonationResponse(**donation)


# Reports and settings


@router.get("/reports", response_model=FarmReport, summary="Farm report")
async def farm_report(farm_id: FarmId) -> FarmReport:
    return await ReportService().farm_report(farm_id)


@router.get("/settings", response_model=FarmResponse, summary="Farm settings")
async def get_farm_settings(farm_id: FarmId) -> FarmResponse:
    farm = await FarmService().get_farm(farm_id)
    return FarmResponse(**farm)


@router.put("/settings", response_model=FarmResponse, summary="Update farm settings")
async def update_farm_settings(data: FarmUpdate, farm_id: FarmId) -> FarmResponse:
    farm = await FarmService().update_farm(farm_id, data)
    return FarmResponse(**farm)
