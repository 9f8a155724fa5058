from sqlalchemy.orm import Session
from sqlalchemy import and_, desc
from typing import List, Dict, Any
from datetime import datetime, timedelta
from uuid import UUID
import logging
from ..models.household import Household
from ..models.household_membership import HouseholdMembership
from ..models.invitation import HouseholdInvitation
from ..models.user import User
from ..models.enums import HouseholdRole, InvitationStatus
from ..utils.constants import AppConstants
from ..utils.email import EmailService
from ..utils.validation import ValidationHelpers
from .household_service import (
    HouseholdService,
    HouseholdNotFoundError,
    NotOwnerError,
    AlreadyOwnerError,
)

logger = logging.getLogger(__name__)


class InvitationServiceError(Exception):
    """Base exception for invitation service errors"""

    pass


class InvitationNotFoundError(InvitationServiceError):
    def __init__(self, message: str = "Invitation not found"):
        super().__init__(message)


class InvitationExpiredError(InvitationServiceError):
    def __init__(self, message: str = "This invitation has expired"):
        super().__init__(message)


class InvitationAlreadyUsedError(InvitationServiceError):
    def __init__(self, message: str = "This invitation has already been used"):
        super().__init__(message)


class InvitationEmailMismatchError(InvitationServiceError):
    def __init__(self, message: str = "This invitation is not for your email"):
        super().__init__(message)


class InvitationAlreadyExistsError(InvitationServiceError):
    def __init__(self, message: str = "An invitation for this email already exists"):
        super().__init__(message)


class AlreadyMemberError(InvitationServiceError):
    def __init__(self, message: str = "User is already a member of this household"):
        super().__init__(message)


class InvitationService:
    def __init__(self, db: Session, email_service: EmailService = None):
        self.db = db
        self.household_service = HouseholdService(db)
        self.email_service = email_service or EmailService()

    def list_invitations(
        self, household_id: UUID, user: User
    ) -> List[HouseholdInvitation]:
        """Pending invitations of a household, newest first (members only)"""
        household = self.household_service.get_household_for_member(household_id, user)

        return (
            self.db.query(HouseholdInvitation)
            .filter(
                and_(
                    HouseholdInvitation.household_id == household.id,
                    HouseholdInvitation.status == InvitationStatus.PENDING.value,
                )
            )
            .order_by(desc(HouseholdInvitation.created_at))
            .all()
        )

    def create_invitation(
        self, household_id: UUID, email: str, user: User
    ) -> HouseholdInvitation:
        """Invite an email address to the household (owner only)"""
        household = self.household_service.get_household_for_owner(household_id, user)
        email = ValidationHelpers.normalize_email(email)

        if any(m.user.email == email for m in household.memberships):
            raise AlreadyMemberError()

        now = datetime.utcnow()
        pending = (
            self.db.query(HouseholdInvitation)
            .filter(
                and_(
                    HouseholdInvitation.household_id == household.id,
                    HouseholdInvitation.invited_email == email,
                    HouseholdInvitation.status == InvitationStatus.PENDING.value,
                    HouseholdInvitation.expires_at > now,
                )
            )
            .first()
        )
        if pending:
            raise InvitationAlreadyExistsError()

        try:
            # Stale pending invitations for this email are superseded
            self.db.query(HouseholdInvitation).filter(
                and_(
                    HouseholdInvitation.household_id == household.id,
                    HouseholdInvitation.invited_email == email,
                    HouseholdInvitation.status == InvitationStatus.PENDING.value,
                )
            ).update(
                {"status": InvitationStatus.EXPIRED.value}, synchronize_session=False
            )

            invitation = HouseholdInvitation(
                household_id=household.id,
                invited_email=email,
                invited_by=user.id,
                status=InvitationStatus.PENDING.value,
                created_at=now,
                expires_at=now + timedelta(days=AppConstants.INVITATION_EXPIRY_DAYS),
            )
            self.db.add(invitation)
            self.db.commit()
            self.db.refresh(invitation)
        except Exception as e:
            self.db.rollback()
            raise InvitationServiceError(f"Failed to create invitation: {str(e)}")

        self.email_service.send_invitation_email(
            email, household.name, user.email, invitation.token
        )
        logger.info(f"Invitation {invitation.id} created for household {household.id}")
        return invitation

    def cancel_invitation(
        self, household_id: UUID, invitation_id: UUID, user: User
    ) -> None:
        household = self.household_service.get_household_for_owner(household_id, user)

        invitation = (
            self.db.query(HouseholdInvitation)
            .filter(
                and_(
                    HouseholdInvitation.id == invitation_id,
                    HouseholdInvitation.household_id == household.id,
                )
            )
            .first()
        )
        if not invitation:
            raise InvitationNotFoundError()

        try:
            self.db.delete(invitation)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise InvitationServiceError(f"Failed to cancel invitation: {str(e)}")

    def list_current_user_invitations(self, user: User) -> List[Dict[str, Any]]:
        """Pending, unexpired invitations addressed to the user's email"""
        invitations = (
            self.db.query(HouseholdInvitation)
            .filter(
                and_(
                    HouseholdInvitation.invited_email
                    == ValidationHelpers.normalize_email(user.email),
                    HouseholdInvitation.status == InvitationStatus.PENDING.value,
                    HouseholdInvitation.expires_at > datetime.utcnow(),
                )
            )
            .order_by(desc(HouseholdInvitation.created_at))
            .all()
        )

        return [
            {
                "id": invitation.id,
                "household_id": invitation.household_id,
                "invited_email": invitation.invited_email,
                "token": invitation.token,
                "status": invitation.status,
                "expires_at": invitation.expires_at,
                "created_at": invitation.created_at,
                "household_name": invitation.household.name,
                "owner_email": invitation.household.owner.email,
            }
            for invitation in invitations
        ]

    def accept_invitation(self, token: UUID, user: User) -> HouseholdMembership:
        """
        Join the invitation's household.

        The user leaves any household they are a member of. Owners must delete
        their own household first, since it cannot be left without an owner.
        """
        invitation = (
            self.db.query(HouseholdInvitation)
            .filter(HouseholdInvitation.token == token)
            .first()
        )
        if not invitation:
            raise InvitationNotFoundError()

        if not invitation.is_pending():
            raise InvitationAlreadyUsedError()

        if invitation.is_expired():
            invitation.status = InvitationStatus.EXPIRED.value
            self.db.commit()
            raise InvitationExpiredError()

        if invitation.invited_email != ValidationHelpers.normalize_email(user.email):
            raise InvitationEmailMismatchError()

        household = self.db.get(Household, invitation.household_id)
        if not household:
            raise HouseholdNotFoundError()

        if household.is_member(user.id):
            raise AlreadyMemberError()

        owned = self.db.query(Household).filter(Household.owner_id == user.id).first()
        if owned:
            raise AlreadyOwnerError(
                "Delete your current household before joining another"
            )

        try:
            previous = (
                self.db.query(HouseholdMembership)
                .filter(HouseholdMembership.user_id == user.id)
                .first()
            )
            if previous:
                self.db.delete(previous)
                self.db.flush()

            membership = HouseholdMembership(
                user_id=user.id,
                household_id=household.id,
                role=HouseholdRole.MEMBER.value,
            )
            self.db.add(membership)
            invitation.status = InvitationStatus.ACCEPTED.value

            self.db.commit()
            self.db.refresh(membership)
        except Exception as e:
            self.db.rollback()
            raise InvitationServiceError(f"Failed to accept invitation: {str(e)}")

        logger.info(f"User {user.id} joined household {household.id} by invitation")
        return membership
