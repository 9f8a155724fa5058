from sqlalchemy.orm import Session
from sqlalchemy import and_, asc, desc, func
from typing import List, Dict, Any, Optional, Tuple
from uuid import UUID
import logging
from ..models.pantry import Pantry, PantryItem
from ..models.recipe import Recipe
from ..models.enums import CreationMethod
from ..schemas.common import build_summary
from ..schemas.recipe import RecipeContent, RecipeCreate, RecipeUpdate
from ..utils.constants import AppConstants, ErrorMessages
from ..utils.prompts import RECIPE_GENERATION_SYSTEM_PROMPT, build_recipe_generation_prompt
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)


class RecipeServiceError(Exception):
    """Base exception for recipe service errors"""

    pass


class RecipeNotFoundError(RecipeServiceError):
    """Recipe does not exist or belongs to another household"""

    def __init__(self, message: str = ErrorMessages.RECIPE_NOT_FOUND):
        super().__init__(message)


# Sort keys accepted by list_recipes, in API spelling
SORT_COLUMNS = {
    "createdAt": Recipe.created_at,
    "title": Recipe.title,
    "prepTime": Recipe.prep_time,
    "cookTime": Recipe.cook_time,
}


class RecipeService:
    def __init__(self, db: Session):
        self.db = db

    def create_recipe(
        self,
        recipe_data: RecipeCreate,
        household_id: UUID,
    ) -> Recipe:
        try:
            recipe = Recipe(
                household_id=household_id,
                creation_method=recipe_data.creation_method.value,
                **self._content_columns(recipe_data),
            )
            self.db.add(recipe)
            self.db.commit()
            self.db.refresh(recipe)
            return recipe
        except Exception as e:
            self.db.rollback()
            raise RecipeServiceError(f"Failed to create recipe: {str(e)}")

    def list_recipes(
        self,
        household_id: UUID,
        search: Optional[str] = None,
        meal_type: Optional[str] = None,
        creation_method: Optional[CreationMethod] = None,
        page: int = AppConstants.DEFAULT_PAGE,
        page_size: int = AppConstants.DEFAULT_PAGE_SIZE,
        sort: str = AppConstants.DEFAULT_RECIPE_SORT,
    ) -> Tuple[List[Recipe], int]:
        """Filtered, sorted page of the household's recipes plus the total match count"""
        filters = [Recipe.household_id == household_id]
        if search:
            filters.append(Recipe.title.ilike(f"%{search.strip()}%"))
        if meal_type:
            filters.append(func.lower(Recipe.meal_type) == meal_type.strip().lower())
        if creation_method:
            filters.append(Recipe.creation_method == creation_method.value)

        query = self.db.query(Recipe).filter(and_(*filters))
        total = query.count()

        descending = sort.startswith("-")
        column = SORT_COLUMNS.get(sort.lstrip("-"), Recipe.created_at)
        order = desc(column) if descending else asc(column)

        recipes = (
            query.order_by(order, asc(Recipe.id))
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return recipes, total

    def get_recipe(self, recipe_id: UUID, household_id: UUID) -> Recipe:
        recipe = (
            self.db.query(Recipe)
            .filter(and_(Recipe.id == recipe_id, Recipe.household_id == household_id))
            .first()
        )
        if not recipe:
            raise RecipeNotFoundError()
        return recipe

    def update_recipe(
        self, recipe_id: UUID, recipe_data: RecipeUpdate, household_id: UUID
    ) -> Recipe:
        """Replace a recipe's content; editing an AI recipe marks it as modified"""
        recipe = self.get_recipe(recipe_id, household_id)

        if recipe_data.creation_method:
            creation_method = recipe_data.creation_method.value
        elif recipe.creation_method == CreationMethod.AI_GENERATED.value:
            creation_method = CreationMethod.AI_GENERATED_MODIFIED.value
        else:
            creation_method = recipe.creation_method

        try:
            for field, value in self._content_columns(recipe_data).items():
                setattr(recipe, field, value)
            recipe.creation_method = creation_method
            self.db.commit()
            self.db.refresh(recipe)
            return recipe
        except Exception as e:
            self.db.rollback()
            raise RecipeServiceError(f"Failed to update recipe: {str(e)}")

    def delete_recipe(self, recipe_id: UUID, household_id: UUID) -> None:
        recipe = self.get_recipe(recipe_id, household_id)

        try:
            self.db.delete(recipe)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise RecipeServiceError(f"Failed to delete recipe: {str(e)}")

    def bulk_delete(
        self, recipe_ids: List[UUID], household_id: UUID
    ) -> Dict[str, Any]:
        """Delete recipes one at a time; each id succeeds or fails on its own"""
        deleted, failed = [], []

        for recipe_id in recipe_ids:
            try:
                removed = (
                    self.db.query(Recipe)
                    .filter(
                        and_(Recipe.id == recipe_id, Recipe.household_id == household_id)
                    )
                    .delete(synchronize_session="fetch")
                )
                self.db.commit()
            except Exception as e:
                self.db.rollback()
                logger.warning(f"Bulk delete failed for recipe {recipe_id}: {e}")
                failed.append({"id": recipe_id, "reason": str(e) or ErrorMessages.UNEXPECTED})
                continue

            if removed:
                deleted.append(recipe_id)
            else:
                failed.append({"id": recipe_id, "reason": ErrorMessages.RECIPE_NOT_FOUND})

        return {
            "deleted": deleted,
            "failed": failed,
            "summary": build_summary(len(recipe_ids), len(deleted)),
        }

    def generate_recipe(
        self, hint: str, use_pantry_items: bool, household_id: UUID, generator
    ) -> Tuple[Recipe, List[str]]:
        """
        Generate a recipe with the LLM and store it as ai_generated.

        `generator` exposes generate_recipe(system_prompt, user_prompt) and
        returns RecipeContent. Returns the stored recipe and any warnings.
        """
        warnings: List[str] = []

        pantry_items: List[PantryItem] = []
        if use_pantry_items:
            pantry_items = self._get_pantry_items(household_id)
            if not pantry_items:
                warnings.append(
                    "Your pantry is empty, so the recipe was generated without pantry items"
                )

        prompt = build_recipe_generation_prompt(hint, pantry_items)
        content: RecipeContent = generator.generate_recipe(
            RECIPE_GENERATION_SYSTEM_PROMPT, prompt
        )

        if pantry_items:
            available = {ValidationHelpers.name_key(i.name) for i in pantry_items}
            missing = [
                ingredient.name
                for ingredient in content.ingredients
                if ValidationHelpers.name_key(ingredient.name) not in available
            ]
            if missing:
                warnings.append(f"Ingredients not in your pantry: {', '.join(missing)}")

        recipe = self.create_recipe(
            RecipeCreate(
                **content.model_dump(), creation_method=CreationMethod.AI_GENERATED
            ),
            household_id,
        )
        logger.info(f"Generated recipe {recipe.id} for household {household_id}")
        return recipe, warnings

    # Private helper methods

    def _get_pantry_items(self, household_id: UUID) -> List[PantryItem]:
        pantry = self.db.query(Pantry).filter(Pantry.household_id == household_id).first()
        return list(pantry.items) if pantry else []

    @staticmethod
    def _content_columns(recipe_data: RecipeContent) -> Dict[str, Any]:
        return {
            "title": recipe_data.title,
            "ingredients": [i.model_dump() for i in recipe_data.ingredients],
            "instructions": recipe_data.instructions,
            "meal_type": recipe_data.meal_type,
            "prep_time": recipe_data.prep_time,
            "cook_time": recipe_data.cook_time,
        }
