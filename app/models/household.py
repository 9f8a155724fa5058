import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from ..database import Base


class Household(Base):
    __tablename__ = "households"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    owner_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", foreign_keys=[owner_id])
    memberships = relationship(
        "HouseholdMembership", back_populates="household", cascade="all, delete-orphan"
    )
    invitations = relationship(
        "HouseholdInvitation", back_populates="household", cascade="all, delete-orphan"
    )
    pantry = relationship(
        "Pantry", back_populates="household", uselist=False, cascade="all, delete-orphan"
    )
    shopping_list = relationship(
        "ShoppingList",
        back_populates="household",
        uselist=False,
        cascade="all, delete-orphan",
    )
    recipes = relationship(
        "Recipe", back_populates="household", cascade="all, delete-orphan"
    )

    # Helper methods
    @property
    def member_count(self) -> int:
        return len(self.memberships)

    def is_member(self, user_id) -> bool:
        return any(m.user_id == user_id for m in self.memberships)

    def is_owner(self, user_id) -> bool:
        return self.owner_id == user_id
