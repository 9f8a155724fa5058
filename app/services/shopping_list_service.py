from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Dict, Any, Optional
from uuid import UUID
import logging
from ..models.household import Household
from ..models.pantry import Pantry, PantryItem
from ..models.shopping_list import ShoppingList, ShoppingListItem
from ..models.user import User
from ..schemas.common import build_summary
from ..schemas.shopping_list import (
    ShoppingListItemCreate,
    ShoppingListItemSort,
    ShoppingListItemUpdate,
)
from ..utils.constants import ErrorMessages
from ..utils.validation import ValidationHelpers
from .pantry_service import PantryService

logger = logging.getLogger(__name__)


class ShoppingListServiceError(Exception):
    """Base exception for shopping list service errors"""

    pass


class ShoppingListNotFoundError(ShoppingListServiceError):
    """Shopping list does not exist or the user cannot access it"""

    def __init__(self, message: str = "Shopping list not found or access denied"):
        super().__init__(message)


class ShoppingListItemNotFoundError(ShoppingListServiceError):
    def __init__(self, message: str = ErrorMessages.ITEM_NOT_FOUND):
        super().__init__(message)


class DuplicateShoppingListItemError(ShoppingListServiceError):
    def __init__(self, duplicate_names: List[str]):
        self.duplicate_names = duplicate_names
        super().__init__(
            f"Items already exist in shopping list: {', '.join(duplicate_names)}"
        )


class TransferToPantryError(ShoppingListServiceError):
    """The household has no pantry to receive purchased items"""

    pass


class ShoppingListService:
    def __init__(self, db: Session):
        self.db = db
        self.pantry_service = PantryService(db)

    def get_or_create_shopping_list(
        self, household_id: UUID, user: User
    ) -> ShoppingList:
        """Get the household's shopping list, creating it on first access"""
        household = self.db.get(Household, household_id)
        if not household or not household.is_member(user.id):
            raise ShoppingListNotFoundError()

        if household.shopping_list:
            return household.shopping_list

        try:
            shopping_list = ShoppingList(household_id=household.id)
            self.db.add(shopping_list)
            self.db.commit()
            self.db.refresh(shopping_list)
        except Exception as e:
            self.db.rollback()
            raise ShoppingListServiceError(f"Failed to create shopping list: {str(e)}")

        logger.info(f"Created shopping list {shopping_list.id} for household {household.id}")
        return shopping_list

    def list_items(
        self,
        list_id: UUID,
        user: User,
        is_purchased: Optional[bool] = None,
        sort: ShoppingListItemSort = ShoppingListItemSort.NAME,
    ) -> List[ShoppingListItem]:
        shopping_list = self._get_list_for_member(list_id, user)

        query = self.db.query(ShoppingListItem).filter(
            ShoppingListItem.shopping_list_id == shopping_list.id
        )
        if is_purchased is not None:
            query = query.filter(ShoppingListItem.is_purchased == is_purchased)

        if sort == ShoppingListItemSort.IS_PURCHASED:
            query = query.order_by(ShoppingListItem.is_purchased, ShoppingListItem.name)
        else:
            query = query.order_by(ShoppingListItem.name)

        return query.all()

    def add_items(
        self, list_id: UUID, items: List[ShoppingListItemCreate], user: User
    ) -> List[ShoppingListItem]:
        shopping_list = self._get_list_for_member(list_id, user)

        duplicates = ValidationHelpers.find_duplicate_names(
            [item.name for item in items],
            [existing.name for existing in shopping_list.items],
        )
        if duplicates:
            raise DuplicateShoppingListItemError(duplicates)

        try:
            created = [
                ShoppingListItem(
                    shopping_list_id=shopping_list.id,
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    is_purchased=item.is_purchased,
                )
                for item in items
            ]
            self.db.add_all(created)
            self.db.commit()
            for item in created:
                self.db.refresh(item)
        except Exception as e:
            self.db.rollback()
            raise ShoppingListServiceError(f"Failed to add items: {str(e)}")

        return created

    def update_item(
        self,
        list_id: UUID,
        item_id: UUID,
        updates: ShoppingListItemUpdate,
        user: User,
    ) -> Dict[str, Any]:
        """
        Update an item. Marking it purchased transfers it into the pantry
        and removes it from the list; the response then carries both rows.
        """
        shopping_list = self._get_list_for_member(list_id, user)
        item = self._get_item_or_raise(shopping_list.id, item_id)
        changes = updates.model_dump(exclude_unset=True)

        if changes.get("is_purchased"):
            pantry = self._get_pantry_or_raise(shopping_list.household_id)
            quantity = changes.get("quantity")
            unit = changes["unit"] if "unit" in changes else item.unit

            if quantity is None:
                quantity = item.quantity
            purchased = {
                "id": item.id,
                "shopping_list_id": item.shopping_list_id,
                "name": item.name,
                "quantity": quantity,
                "unit": unit,
                "is_purchased": True,
            }

            try:
                pantry_item = self._transfer_to_pantry(
                    item, pantry, quantity=quantity, unit=unit
                )
                self.db.commit()
                self.db.refresh(pantry_item)
            except Exception as e:
                self.db.rollback()
                raise TransferToPantryError(
                    f"Failed to transfer item to pantry: {str(e)}"
                )

            logger.info(f"Item {item_id} purchased into pantry item {pantry_item.id}")
            return {"item": purchased, "pantry_item": pantry_item}

        try:
            for field, value in changes.items():
                setattr(item, field, value)
            self.db.commit()
            self.db.refresh(item)
        except Exception as e:
            self.db.rollback()
            raise ShoppingListServiceError(f"Failed to update item: {str(e)}")

        return {"item": item, "pantry_item": None}

    def delete_item(self, list_id: UUID, item_id: UUID, user: User) -> None:
        shopping_list = self._get_list_for_member(list_id, user)
        item = self._get_item_or_raise(shopping_list.id, item_id)

        try:
            self.db.delete(item)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise ShoppingListServiceError(f"Failed to delete item: {str(e)}")

    def bulk_purchase(
        self, list_id: UUID, item_ids: List[UUID], user: User
    ) -> Dict[str, Any]:
        """
        Purchase items one at a time, in request order.

        Each item is committed on its own; a failure is recorded for that item
        and processing moves on. Earlier successes are never rolled back.
        Sequential processing lets two items with the same name merge into
        one pantry item.
        """
        shopping_list = self._get_list_for_member(list_id, user)
        pantry = self._get_pantry_or_raise(shopping_list.household_id)

        purchased, transferred, failed = [], [], []

        for item_id in item_ids:
            try:
                item = self._find_item(shopping_list.id, item_id)
                if not item:
                    failed.append({"item_id": item_id, "reason": ErrorMessages.ITEM_NOT_FOUND})
                    continue

                if item.is_purchased:
                    failed.append(
                        {"item_id": item_id, "reason": ErrorMessages.ITEM_ALREADY_PURCHASED}
                    )
                    continue

                pantry_item = self._transfer_to_pantry(
                    item, pantry, quantity=item.quantity, unit=item.unit
                )
                self.db.commit()

                purchased.append(item_id)
                transferred.append({"item_id": item_id, "pantry_item_id": pantry_item.id})
            except Exception as e:
                self.db.rollback()
                logger.warning(f"Bulk purchase failed for item {item_id}: {e}")
                failed.append({"item_id": item_id, "reason": str(e) or ErrorMessages.UNEXPECTED})

        logger.info(
            f"Bulk purchase on list {shopping_list.id}: "
            f"{len(purchased)}/{len(item_ids)} succeeded"
        )
        return {
            "purchased": purchased,
            "transferred": transferred,
            "failed": failed,
            "summary": build_summary(len(item_ids), len(purchased)),
        }

    def bulk_delete(
        self, list_id: UUID, item_ids: List[UUID], user: User
    ) -> Dict[str, Any]:
        """Delete items one at a time; missing items are reported, not raised"""
        shopping_list = self._get_list_for_member(list_id, user)

        deleted, failed = [], []

        for item_id in item_ids:
            try:
                removed = (
                    self.db.query(ShoppingListItem)
                    .filter(
                        and_(
                            ShoppingListItem.id == item_id,
                            ShoppingListItem.shopping_list_id == shopping_list.id,
                        )
                    )
                    .delete(synchronize_session="fetch")
                )
                self.db.commit()
            except Exception as e:
                self.db.rollback()
                logger.warning(f"Bulk delete failed for item {item_id}: {e}")
                failed.append({"item_id": item_id, "reason": str(e) or ErrorMessages.UNEXPECTED})
                continue

            if removed:
                deleted.append(item_id)
            else:
                failed.append({"item_id": item_id, "reason": ErrorMessages.ITEM_NOT_FOUND})

        return {
            "deleted": deleted,
            "failed": failed,
            "summary": build_summary(len(item_ids), len(deleted)),
        }

    # Private helper methods

    def _transfer_to_pantry(
        self,
        item: ShoppingListItem,
        pantry: Pantry,
        quantity: float,
        unit: Optional[str],
    ) -> PantryItem:
        """Merge the item into the pantry and remove it from the list (no commit)"""
        pantry_item = self.pantry_service.add_or_increment(
            pantry, item.name, quantity, unit
        )

        try:
            self.db.delete(item)
            self.db.flush()
        except Exception as e:
            raise ShoppingListServiceError(ErrorMessages.DELETE_FROM_LIST_FAILED) from e

        return pantry_item

    def _get_list_for_member(self, list_id: UUID, user: User) -> ShoppingList:
        shopping_list = self.db.get(ShoppingList, list_id)
        if not shopping_list or not shopping_list.household.is_member(user.id):
            raise ShoppingListNotFoundError()
        return shopping_list

    def _find_item(self, list_id: UUID, item_id: UUID) -> Optional[ShoppingListItem]:
        return (
            self.db.query(ShoppingListItem)
            .filter(
                and_(
                    ShoppingListItem.id == item_id,
                    ShoppingListItem.shopping_list_id == list_id,
                )
            )
            .first()
        )

    def _get_item_or_raise(self, list_id: UUID, item_id: UUID) -> ShoppingListItem:
        item = self._find_item(list_id, item_id)
        if not item:
            raise ShoppingListItemNotFoundError()
        return item

    def _get_pantry_or_raise(self, household_id: UUID) -> Pantry:
        pantry = self.db.query(Pantry).filter(Pantry.household_id == household_id).first()
        if not pantry:
            raise TransferToPantryError(
                f"Household {household_id} has no pantry to receive purchased items"
            )
        return pantry
