from .household_service import HouseholdService
from .invitation_service import InvitationService
from .openrouter_service import OpenRouterService
from .pantry_service import PantryService
from .recipe_service import RecipeService
from .shopping_list_service import ShoppingListService

__all__ = [
    "HouseholdService",
    "InvitationService",
    "OpenRouterService",
    "PantryService",
    "RecipeService",
    "ShoppingListService",
]
