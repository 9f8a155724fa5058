from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.concurrency import run_in_threadpool
from pydantic import UUID4
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from ..database import get_db
from ..services.recipe_service import RecipeService
from ..schemas.recipe import (
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeListResponse,
    RecipeBulkDeleteRequest,
    RecipeBulkDeleteResponse,
    GenerateRecipeRequest,
    GenerateRecipeResponse,
)
from ..dependencies.permissions import require_household_member
from ..dependencies.llm import get_recipe_generator
from ..utils.router_helpers import handle_service_errors
from ..utils.constants import AppConstants
from ..models.enums import CreationMethod
from ..models.user import User

router = APIRouter(prefix="/recipes", tags=["recipes"])

SORT_PATTERN = r"^-?(createdAt|title|prepTime|cookTime)$"


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_recipe(
    recipe_data: RecipeCreate,
    response: Response,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    recipe = recipe_service.create_recipe(recipe_data, household_id)

    response.headers["Location"] = f"/api/recipes/{recipe.id}"
    return recipe


@router.get("", response_model=RecipeListResponse)
@handle_service_errors
async def list_recipes(
    search: Optional[str] = Query(None, max_length=AppConstants.MAX_RECIPE_TITLE_LENGTH),
    meal_type: Optional[str] = Query(None, alias="mealType"),
    creation_method: Optional[CreationMethod] = Query(None, alias="creationMethod"),
    page: int = Query(AppConstants.DEFAULT_PAGE, ge=1),
    page_size: int = Query(
        AppConstants.DEFAULT_PAGE_SIZE,
        ge=1,
        le=AppConstants.MAX_PAGE_SIZE,
        alias="pageSize",
    ),
    sort: str = Query(AppConstants.DEFAULT_RECIPE_SORT, pattern=SORT_PATTERN),
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    """List household recipes with search, filters, sorting and pagination"""
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    recipes, total = recipe_service.list_recipes(
        household_id,
        search=search,
        meal_type=meal_type,
        creation_method=creation_method,
        page=page,
        page_size=page_size,
        sort=sort,
    )

    return {
        "data": recipes,
        "pagination": {"page": page, "page_size": page_size, "total": total},
    }


@router.delete("", response_model=RecipeBulkDeleteResponse)
@handle_service_errors
async def bulk_delete_recipes(
    bulk_data: RecipeBulkDeleteRequest,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    """Delete several recipes; per-recipe failures are reported in the body"""
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    return recipe_service.bulk_delete(bulk_data.ids, household_id)


@router.post(
    "/generate",
    response_model=GenerateRecipeResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
@handle_service_errors
async def generate_recipe(
    generate_data: GenerateRecipeRequest,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
    generator=Depends(get_recipe_generator),
):
    """Generate a recipe with the LLM, optionally from pantry items, and save it"""
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    # The LLM client is blocking; keep it off the event loop
    recipe, warnings = await run_in_threadpool(
        recipe_service.generate_recipe,
        generate_data.hint,
        generate_data.use_pantry_items,
        household_id,
        generator,
    )
    return {"recipe": recipe, "warnings": warnings}


@router.get("/{recipe_id}", response_model=RecipeResponse)
@handle_service_errors
async def get_recipe(
    recipe_id: UUID4,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    return recipe_service.get_recipe(recipe_id, household_id)


@router.put("/{recipe_id}", response_model=RecipeResponse)
@handle_service_errors
async def update_recipe(
    recipe_id: UUID4,
    recipe_data: RecipeUpdate,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    return recipe_service.update_recipe(recipe_id, recipe_data, household_id)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
@handle_service_errors
async def delete_recipe(
    recipe_id: UUID4,
    db: Session = Depends(get_db),
    user_household: tuple[User, UUID] = Depends(require_household_member),
):
    current_user, household_id = user_household
    recipe_service = RecipeService(db)

    recipe_service.delete_recipe(recipe_id, household_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
