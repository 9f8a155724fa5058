import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Float, Uuid, Index, func
from sqlalchemy.orm import relationship
from ..database import Base


class Pantry(Base):
    __tablename__ = "pantries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    household_id = Column(
        Uuid,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow)

    household = relationship("Household", back_populates="pantry")
    items = relationship(
        "PantryItem",
        back_populates="pantry",
        cascade="all, delete-orphan",
        order_by="PantryItem.name",
    )


class PantryItem(Base):
    __tablename__ = "pantry_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    pantry_id = Column(
        Uuid, ForeignKey("pantries.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(100), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    pantry = relationship("Pantry", back_populates="items")


# Item names are unique per pantry, ignoring case
Index(
    "uq_pantry_items_pantry_lower_name",
    PantryItem.pantry_id,
    func.lower(PantryItem.name),
    unique=True,
)
