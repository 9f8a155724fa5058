from fastapi import APIRouter, Depends, Response, status
from pydantic import UUID4
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.invitation_service import InvitationService
from ..schemas.invitation import (
    InvitationCreate,
    InvitationCreatedResponse,
    InvitationListResponse,
    CurrentUserInvitationsResponse,
    AcceptInvitationResponse,
)
from ..dependencies.permissions import get_current_user
from ..utils.router_helpers import handle_service_errors
from ..models.user import User

router = APIRouter(tags=["invitations"])


@router.get(
    "/households/{household_id}/invitations", response_model=InvitationListResponse
)
@handle_service_errors
async def list_household_invitations(
    household_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Pending invitations of the household, newest first"""
    invitation_service = InvitationService(db)

    invitations = invitation_service.list_invitations(household_id, current_user)
    return {"data": invitations}


@router.post(
    "/households/{household_id}/invitations",
    response_model=InvitationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def create_invitation(
    household_id: UUID4,
    invitation_data: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Invite an email address to the household (owner only)"""
    invitation_service = InvitationService(db)

    invitation = invitation_service.create_invitation(
        household_id, invitation_data.email, current_user
    )
    return {"invitation": invitation}


@router.delete(
    "/households/{household_id}/invitations/{invitation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
@handle_service_errors
async def cancel_invitation(
    household_id: UUID4,
    invitation_id: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invitation_service = InvitationService(db)

    invitation_service.cancel_invitation(household_id, invitation_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/invitations/current", response_model=CurrentUserInvitationsResponse)
@handle_service_errors
async def list_my_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Pending invitations addressed to the current user's email"""
    invitation_service = InvitationService(db)

    return {"data": invitation_service.list_current_user_invitations(current_user)}


@router.patch("/invitations/{token}/accept", response_model=AcceptInvitationResponse)
@handle_service_errors
async def accept_invitation(
    token: UUID4,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Join a household using an invitation token"""
    invitation_service = InvitationService(db)

    membership = invitation_service.accept_invitation(token, current_user)
    return {"membership": membership}
