from .common import CamelModel, ErrorResponse, BulkSummary, PaginationInfo
from .household import (
    HouseholdCreate,
    HouseholdUpdate,
    HouseholdSummary,
    HouseholdListResponse,
    HouseholdDetail,
    HouseholdMembersResponse,
)
from .invitation import (
    InvitationCreate,
    InvitationResponse,
    InvitationCreatedResponse,
    InvitationListResponse,
    CurrentUserInvitationsResponse,
    AcceptInvitationResponse,
)
from .pantry import (
    PantryItemCreate,
    AddPantryItemsRequest,
    PantryItemUpdate,
    PantryItemResponse,
    PantryResponse,
)
from .shopping_list import (
    ShoppingListItemCreate,
    AddShoppingListItemsRequest,
    ShoppingListItemUpdate,
    ShoppingListItemResponse,
    ShoppingListResponse,
    BulkPurchaseRequest,
    BulkPurchaseResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from .recipe import (
    Ingredient,
    RecipeContent,
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeListResponse,
    GenerateRecipeRequest,
    GenerateRecipeResponse,
)
