from .user import User
from .household import Household
from .household_membership import HouseholdMembership
from .invitation import HouseholdInvitation
from .pantry import Pantry, PantryItem
from .shopping_list import ShoppingList, ShoppingListItem
from .recipe import Recipe


__all__ = [
    "User",
    "Household",
    "HouseholdMembership",
    "HouseholdInvitation",
    "Pantry",
    "PantryItem",
    "ShoppingList",
    "ShoppingListItem",
    "Recipe",
]
