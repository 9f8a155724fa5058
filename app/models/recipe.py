import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Text, JSON, Uuid
from sqlalchemy.orm import relationship
from ..database import Base
from .enums import CreationMethod


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    household_id = Column(
        Uuid,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(200), nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)  # [{name, quantity, unit}]
    instructions = Column(Text, nullable=False)
    meal_type = Column(String(50))
    prep_time = Column(Integer)  # minutes
    cook_time = Column(Integer)  # minutes
    creation_method = Column(
        String, nullable=False, default=CreationMethod.MANUAL.value
    )

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    household = relationship("Household", back_populates="recipes")
