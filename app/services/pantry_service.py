from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from uuid import UUID
import logging
from ..models.household import Household
from ..models.pantry import Pantry, PantryItem
from ..models.user import User
from ..schemas.pantry import PantryItemCreate, PantryItemUpdate
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)


class PantryServiceError(Exception):
    """Base exception for pantry service errors"""

    pass


class PantryNotFoundError(PantryServiceError):
    """Pantry does not exist or the user cannot access it"""

    def __init__(self, message: str = "Pantry not found or access denied"):
        super().__init__(message)


class PantryItemNotFoundError(PantryServiceError):
    def __init__(self, message: str = "Item not found or access denied"):
        super().__init__(message)


class DuplicatePantryItemError(PantryServiceError):
    """One or more item names already exist in the pantry (case-insensitive)"""

    def __init__(self, duplicate_names: List[str]):
        self.duplicate_names = duplicate_names
        super().__init__(
            f"Items already exist in pantry: {', '.join(duplicate_names)}"
        )


class PantryService:
    def __init__(self, db: Session):
        self.db = db

    def get_pantry_by_household(self, household_id: UUID, user: User) -> Pantry:
        """Get the household's pantry with items sorted by name"""
        household = self.db.get(Household, household_id)
        if not household or not household.is_member(user.id) or not household.pantry:
            raise PantryNotFoundError()
        return household.pantry

    def add_items(
        self, household_id: UUID, items: List[PantryItemCreate], user: User
    ) -> List[PantryItem]:
        """Add a batch of items; the whole batch is rejected on any name collision"""
        pantry = self.get_pantry_by_household(household_id, user)

        duplicates = ValidationHelpers.find_duplicate_names(
            [item.name for item in items], [existing.name for existing in pantry.items]
        )
        if duplicates:
            raise DuplicatePantryItemError(duplicates)

        try:
            created = [
                PantryItem(
                    pantry_id=pantry.id,
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                )
                for item in items
            ]
            self.db.add_all(created)
            self.db.commit()
            for item in created:
                self.db.refresh(item)
        except Exception as e:
            self.db.rollback()
            raise PantryServiceError(f"Failed to add pantry items: {str(e)}")

        logger.info(f"Added {len(created)} items to pantry {pantry.id}")
        return created

    def list_items(self, pantry_id: UUID, user: User) -> List[PantryItem]:
        pantry = self._get_pantry_for_member(pantry_id, user)
        return (
            self.db.query(PantryItem)
            .filter(PantryItem.pantry_id == pantry.id)
            .order_by(PantryItem.name)
            .all()
        )

    def update_item(
        self, pantry_id: UUID, item_id: UUID, updates: PantryItemUpdate, user: User
    ) -> PantryItem:
        item = self._get_item_or_raise(pantry_id, item_id, user)

        try:
            for field, value in updates.model_dump(exclude_unset=True).items():
                setattr(item, field, value)
            self.db.commit()
            self.db.refresh(item)
            return item
        except Exception as e:
            self.db.rollback()
            raise PantryServiceError(f"Failed to update pantry item: {str(e)}")

    def delete_item(self, pantry_id: UUID, item_id: UUID, user: User) -> None:
        item = self._get_item_or_raise(pantry_id, item_id, user)

        try:
            self.db.delete(item)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise PantryServiceError(f"Failed to delete pantry item: {str(e)}")

    def add_or_increment(
        self, pantry: Pantry, name: str, quantity: float, unit: Optional[str]
    ) -> PantryItem:
        """
        Merge a quantity into the pantry item with the same name (ignoring case),
        or create the item when none matches. Units are not converted.

        Flushes but does not commit; the caller owns the transaction.
        """
        existing = self.find_item_by_name(pantry, name)

        if existing:
            existing.quantity = (existing.quantity or 0) + quantity
            self.db.flush()
            return existing

        item = PantryItem(name=name, quantity=quantity, unit=unit)
        pantry.items.append(item)
        self.db.flush()
        return item

    def find_item_by_name(self, pantry: Pantry, name: str) -> Optional[PantryItem]:
        """Case-insensitive match against the pantry's loaded items"""
        key = ValidationHelpers.name_key(name)
        return next(
            (item for item in pantry.items if ValidationHelpers.name_key(item.name) == key),
            None,
        )

    # Private helper methods

    def _get_pantry_for_member(self, pantry_id: UUID, user: User) -> Pantry:
        pantry = self.db.get(Pantry, pantry_id)
        if not pantry or not pantry.household.is_member(user.id):
            raise PantryNotFoundError()
        return pantry

    def _get_item_or_raise(self, pantry_id: UUID, item_id: UUID, user: User) -> PantryItem:
        pantry = self._get_pantry_for_member(pantry_id, user)
        item = (
            self.db.query(PantryItem)
            .filter(and_(PantryItem.id == item_id, PantryItem.pantry_id == pantry.id))
            .first()
        )
        if not item:
            raise PantryItemNotFoundError()
        return item
