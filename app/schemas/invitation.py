from pydantic import EmailStr, field_validator
from typing import List
from datetime import datetime
from uuid import UUID
from .common import CamelModel
from ..models.enums import HouseholdRole, InvitationStatus
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class InvitationCreate(CamelModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if not isinstance(v, str):
            return v
        v = ValidationHelpers.normalize_email(v)
        if len(v) > AppConstants.MAX_EMAIL_LENGTH:
            raise ValueError(
                f"Email must be at most {AppConstants.MAX_EMAIL_LENGTH} characters"
            )
        return v


class InvitationResponse(CamelModel):
    id: UUID
    household_id: UUID
    invited_email: str
    token: UUID
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime


class InvitationCreatedResponse(CamelModel):
    invitation: InvitationResponse


class InvitationListResponse(CamelModel):
    data: List[InvitationResponse]


class CurrentUserInvitation(InvitationResponse):
    household_name: str
    owner_email: str


class CurrentUserInvitationsResponse(CamelModel):
    data: List[CurrentUserInvitation]


class MembershipResponse(CamelModel):
    household_id: UUID
    user_id: UUID
    role: HouseholdRole
    joined_at: datetime


class AcceptInvitationResponse(CamelModel):
    membership: MembershipResponse
