import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, Float, Uuid, Index, func
from sqlalchemy.orm import relationship
from ..database import Base


class ShoppingList(Base):
    __tablename__ = "shopping_lists"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    household_id = Column(
        Uuid,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    household = relationship("Household", back_populates="shopping_list")
    items = relationship(
        "ShoppingListItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListItem.name",
    )


class ShoppingListItem(Base):
    __tablename__ = "shopping_list_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    shopping_list_id = Column(
        Uuid, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(100), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(20), nullable=True)
    is_purchased = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    shopping_list = relationship("ShoppingList", back_populates="items")


# Item names are unique per shopping list, ignoring case
Index(
    "uq_shopping_list_items_list_lower_name",
    ShoppingListItem.shopping_list_id,
    func.lower(ShoppingListItem.name),
    unique=True,
)
