from fastapi import APIRouter, Depends, Response, status
from pydantic import UUID4
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.household_service import HouseholdService
from ..services.invitation_service import InvitationService
from ..schemas.household import (
    HouseholdCreate,
    HouseholdUpdate,
    HouseholdSummary,
    HouseholdListResponse,
    HouseholdDetail,
    HouseholdMembersResponse,
)
from ..schemas.invitation import InvitationCreate, InvitationCreatedResponse
from ..dependencies.permissions import get_current_user
from ..utils.router_helpers import handle_service_errors
from ..models.user import User

router = APIRouter(prefix="/households", tags=["households"])


@router.get("", response_model=HouseholdListResponse)
@handle_service_errors
async def list_my_households(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the household the current user belongs to (zero or one)"""
    household_service = HouseholdService(db)

    households, owned_household_id = household_service.list_user_households(
        current_user
    )

    return HouseholdListResponse(
        data=[HouseholdSummary.model_validate(h) for h in households],
        owned_household_id=owned_household_id,
    )


@router.post("", response_model=HouseholdSummary, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_household(
    household_data: HouseholdCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a new household with current user as owner"""
    household_service = HouseholdService(db)

    household = household_service.create_household(household_data, current_user)

    response.headers["Location"] = f"/api/households/{household.id}"
    return HouseholdSummary.model_validate(household)


@router.get("/{household_id}", response_model=HouseholdDetail)
@handle_service_errors
async def get_household(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get household details with its members"""
    household_service = HouseholdService(db)

    return household_service.get_household(household_id, current_user)


@router.patch("/{household_id}", response_model=HouseholdSummary)
@handle_service_errors
async def update_household(
    household_id: UUID4,
    household_update: HouseholdUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename the household (owner only)"""
    household_service = HouseholdService(db)

    household = household_service.update_household(
        household_id, household_update, current_user
    )
    return HouseholdSummary.model_validate(household)


@router.delete(
    "/{household_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
@handle_service_errors
async def delete_household(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the household (owner only, once no other members remain)"""
    household_service = HouseholdService(db)

    household_service.delete_household(household_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{household_id}/members", response_model=HouseholdMembersResponse)
@handle_service_errors
async def list_household_members(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    household_service = HouseholdService(db)

    members = household_service.list_members(household_id, current_user)
    return {"data": members}


@router.post(
    "/{household_id}/members",
    response_model=InvitationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def invite_household_member(
    household_id: UUID4,
    invitation_data: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Invite a new member by email (owner only)"""
    invitation_service = InvitationService(db)

    invitation = invitation_service.create_invitation(
        household_id, invitation_data.email, current_user
    )
    return {"invitation": invitation}
