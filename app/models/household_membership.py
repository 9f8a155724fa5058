import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from ..database import Base
from .enums import HouseholdRole


class HouseholdMembership(Base):
    __tablename__ = "household_memberships"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # One membership per user
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    household_id = Column(
        Uuid, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )

    role = Column(String, default=HouseholdRole.MEMBER.value, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="membership")
    household = relationship("Household", back_populates="memberships")
