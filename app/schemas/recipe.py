import copy
from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from uuid import UUID
from .common import BulkIdFailure, BulkSummary, CamelModel, PaginationInfo
from ..models.enums import CreationMethod
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class Ingredient(CamelModel):
    name: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return ValidationHelpers.normalize_name(v) if isinstance(v, str) else v


class RecipeContent(CamelModel):
    """Recipe fields shared by manual entry and LLM output"""

    title: str = Field(
        ..., min_length=1, max_length=AppConstants.MAX_RECIPE_TITLE_LENGTH
    )
    ingredients: List[Ingredient] = Field(..., min_length=1)
    instructions: str = Field(
        ...,
        min_length=AppConstants.MIN_INSTRUCTIONS_LENGTH,
        max_length=AppConstants.MAX_INSTRUCTIONS_LENGTH,
    )
    meal_type: Optional[str] = Field(
        None, max_length=AppConstants.MAX_MEAL_TYPE_LENGTH
    )
    prep_time: Optional[int] = Field(None, ge=0, le=AppConstants.MAX_RECIPE_MINUTES)
    cook_time: Optional[int] = Field(None, ge=0, le=AppConstants.MAX_RECIPE_MINUTES)


class RecipeCreate(RecipeContent):
    creation_method: CreationMethod = CreationMethod.MANUAL


class RecipeUpdate(RecipeContent):
    creation_method: Optional[CreationMethod] = None


class RecipeResponse(RecipeContent):
    id: UUID
    household_id: UUID
    creation_method: CreationMethod
    created_at: datetime
    updated_at: Optional[datetime] = None


class RecipeListResponse(CamelModel):
    data: List[RecipeResponse]
    pagination: PaginationInfo


class RecipeBulkDeleteRequest(CamelModel):
    ids: List[UUID] = Field(
        ..., min_length=1, max_length=AppConstants.MAX_BULK_RECIPE_IDS
    )


class RecipeBulkDeleteResponse(CamelModel):
    deleted: List[UUID]
    failed: List[BulkIdFailure]
    summary: BulkSummary


class GenerateRecipeRequest(CamelModel):
    hint: str = Field(
        ...,
        min_length=1,
        max_length=AppConstants.MAX_HINT_LENGTH,
        pattern=r"^[^<>&]*$",
    )
    use_pantry_items: bool


class GenerateRecipeResponse(CamelModel):
    recipe: RecipeResponse
    warnings: List[str] = []


# Keywords the structured-output endpoint does not accept
_DROPPED_KEYWORDS = ("title", "default", "description")


def _normalize_schema(node: Dict[str, Any], defs: Dict[str, Any]) -> Dict[str, Any]:
    if "$ref" in node:
        node = copy.deepcopy(defs[node["$ref"].rsplit("/", 1)[-1]])

    node = {k: v for k, v in node.items() if k not in _DROPPED_KEYWORDS}

    if "exclusiveMinimum" in node:
        node["minimum"] = node.pop("exclusiveMinimum")

    if "properties" in node:
        node["properties"] = {
            name: _normalize_schema(prop, defs)
            for name, prop in node["properties"].items()
        }
        # Strict mode requires every property to be listed as required
        node["required"] = list(node["properties"])
        node["additionalProperties"] = False

    if isinstance(node.get("items"), dict):
        node["items"] = _normalize_schema(node["items"], defs)

    if "anyOf" in node:
        node["anyOf"] = [_normalize_schema(option, defs) for option in node["anyOf"]]

    return node


def recipe_json_schema() -> Dict[str, Any]:
    """
    JSON schema for LLM structured output, derived from RecipeContent.

    References are inlined, every property is required (optional fields
    accept null) and exclusiveMinimum is rewritten as minimum.
    """
    schema = RecipeContent.model_json_schema(by_alias=True)
    defs = schema.pop("$defs", {})
    return _normalize_schema(schema, defs)


def recipe_response_format() -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": "recipe", "strict": True, "schema": recipe_json_schema()},
    }
