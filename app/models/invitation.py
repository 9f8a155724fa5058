import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship
from ..database import Base
from .enums import InvitationStatus


class HouseholdInvitation(Base):
    __tablename__ = "household_invitations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    household_id = Column(
        Uuid, ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )
    invited_email = Column(String(255), nullable=False, index=True)
    token = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    status = Column(String, default=InvitationStatus.PENDING.value, nullable=False)
    invited_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))

    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    household = relationship("Household", back_populates="invitations")
    inviter = relationship("User", foreign_keys=[invited_by])

    __table_args__ = (
        Index("idx_invitation_household_email", "household_id", "invited_email"),
    )

    def is_expired(self, now: datetime = None) -> bool:
        return self.expires_at <= (now or datetime.utcnow())

    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING.value
