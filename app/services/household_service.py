from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional, Tuple
from uuid import UUID
import logging
from ..models.household import Household
from ..models.household_membership import HouseholdMembership
from ..models.pantry import Pantry
from ..models.shopping_list import ShoppingList
from ..models.user import User
from ..models.enums import HouseholdRole
from ..schemas.household import HouseholdCreate, HouseholdUpdate

logger = logging.getLogger(__name__)


# Custom Exceptions for better error handling
class HouseholdServiceError(Exception):
    """Base exception for household service errors"""

    pass


class HouseholdNotFoundError(HouseholdServiceError):
    """Household does not exist or the user is not a member"""

    def __init__(self, message: str = "Household not found"):
        super().__init__(message)


class NotOwnerError(HouseholdServiceError):
    """Operation restricted to the household owner"""

    def __init__(self, message: str = "Only the owner can perform this action"):
        super().__init__(message)


class AlreadyOwnerError(HouseholdServiceError):
    """User already owns a household"""

    def __init__(self, message: str = "You already own a household"):
        super().__init__(message)


class HasOtherMembersError(HouseholdServiceError):
    """Household still has members besides the owner"""

    def __init__(self, message: str = "Cannot delete household with other members"):
        super().__init__(message)


class HouseholdService:
    def __init__(self, db: Session):
        self.db = db

    def list_user_households(
        self, user: User
    ) -> Tuple[List[Household], Optional[UUID]]:
        """Return the user's household (zero or one) and the id of the household they own"""
        membership = self._get_membership(user.id)
        households = [membership.household] if membership else []

        owned = self._get_owned_household(user.id)
        return households, owned.id if owned else None

    def create_household(self, household_data: HouseholdCreate, user: User) -> Household:
        """Create a household owned by the user, with its pantry and shopping list"""

        if self._get_owned_household(user.id):
            raise AlreadyOwnerError()

        try:
            # A user belongs to a single household; leaving is implicit
            previous = self._get_membership(user.id)
            if previous:
                logger.info(
                    f"User {user.id} leaves household {previous.household_id} "
                    f"to create a new one"
                )
                self.db.delete(previous)
                self.db.flush()

            household = Household(name=household_data.name, owner_id=user.id)
            self.db.add(household)
            self.db.flush()  # Get ID without committing

            self._create_membership(user.id, household.id, HouseholdRole.OWNER.value)
            self.db.add(Pantry(household_id=household.id))
            self.db.add(ShoppingList(household_id=household.id))

            self.db.commit()
            self.db.refresh(household)
        except Exception as e:
            self.db.rollback()
            raise HouseholdServiceError(f"Failed to create household: {str(e)}")

        logger.info(f"Household {household.id} created by user {user.id}")
        return household

    def get_household(self, household_id: UUID, user: User) -> Dict[str, Any]:
        """Get household details with members; non-members see a 404"""
        household = self.get_household_for_member(household_id, user)

        return {
            "id": household.id,
            "name": household.name,
            "created_at": household.created_at,
            "owner_id": household.owner_id,
            "members": [
                {"id": m.user.id, "email": m.user.email}
                for m in self._sorted_memberships(household)
            ],
        }

    def update_household(
        self, household_id: UUID, household_data: HouseholdUpdate, user: User
    ) -> Household:
        household = self.get_household_for_owner(household_id, user)

        try:
            household.name = household_data.name
            self.db.commit()
            self.db.refresh(household)
            return household
        except Exception as e:
            self.db.rollback()
            raise HouseholdServiceError(f"Failed to update household: {str(e)}")

    def delete_household(self, household_id: UUID, user: User) -> None:
        """Delete a household; only the owner may, and only once they are alone in it"""
        household = self.get_household_for_owner(household_id, user)

        if any(m.user_id != user.id for m in household.memberships):
            raise HasOtherMembersError()

        try:
            self.db.delete(household)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise HouseholdServiceError(f"Failed to delete household: {str(e)}")

        logger.info(f"Household {household_id} deleted by owner {user.id}")

    def list_members(self, household_id: UUID, user: User) -> List[Dict[str, Any]]:
        household = self.get_household_for_member(household_id, user)

        return [
            {
                "id": m.user.id,
                "email": m.user.email,
                "role": m.role,
                "joined_at": m.joined_at,
            }
            for m in self._sorted_memberships(household)
        ]

    # Access helpers shared with the other services

    def get_household_for_member(self, household_id: UUID, user: User) -> Household:
        """Get a household the user belongs to; absence and non-membership look the same"""
        household = self.db.get(Household, household_id)
        if not household or not household.is_member(user.id):
            raise HouseholdNotFoundError()
        return household

    def get_household_for_owner(self, household_id: UUID, user: User) -> Household:
        household = self.get_household_for_member(household_id, user)
        if not household.is_owner(user.id):
            raise NotOwnerError()
        return household

    def get_user_household_id(self, user_id: UUID) -> Optional[UUID]:
        membership = self._get_membership(user_id)
        return membership.household_id if membership else None

    # Private helper methods

    def _get_membership(self, user_id: UUID) -> Optional[HouseholdMembership]:
        return (
            self.db.query(HouseholdMembership)
            .filter(HouseholdMembership.user_id == user_id)
            .first()
        )

    def _get_owned_household(self, user_id: UUID) -> Optional[Household]:
        return self.db.query(Household).filter(Household.owner_id == user_id).first()

    def _create_membership(
        self, user_id: UUID, household_id: UUID, role: str
    ) -> HouseholdMembership:
        membership = HouseholdMembership(
            user_id=user_id, household_id=household_id, role=role
        )
        self.db.add(membership)
        return membership

    @staticmethod
    def _sorted_memberships(household: Household) -> List[HouseholdMembership]:
        return sorted(household.memberships, key=lambda m: m.joined_at)
