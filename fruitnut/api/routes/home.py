"""Role picker API route."""

from fastapi import APIRouter

from fruitnut.api.deps import AppSessionDep, CurrentIdentity
from fruitnut.schemas.session import RolePickerResponse

router = APIRouter(prefix="/home", tags=["home"])


@router.get(
    "",
    response_model=RolePickerResponse,
    summary="Role picker",
    description="Lists the user's profiles. Select one with POST /session/active-profile.",
)
async def role_picker(session: AppSessionDep, identity: CurrentIdentity) -> RolePickerResponse:
    return RolePickerResponse(profiles=list(session.profiles))
