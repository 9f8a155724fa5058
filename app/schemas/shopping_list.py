from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum
from uuid import UUID
from .common import BulkItemFailure, BulkSummary, CamelModel
from .pantry import PantryItemResponse
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class ShoppingListItemSort(str, Enum):
    NAME = "name"
    IS_PURCHASED = "isPurchased"


class ShoppingListItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=AppConstants.MAX_ITEM_NAME_LENGTH)
    quantity: float = Field(1, ge=0)
    unit: Optional[str] = Field(None, max_length=AppConstants.MAX_UNIT_LENGTH)
    is_purchased: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return ValidationHelpers.normalize_name(v) if isinstance(v, str) else v


class AddShoppingListItemsRequest(CamelModel):
    items: List[ShoppingListItemCreate] = Field(
        ..., min_length=1, max_length=AppConstants.MAX_ITEMS_PER_BATCH
    )


class ShoppingListItemUpdate(CamelModel):
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=AppConstants.MAX_UNIT_LENGTH)
    is_purchased: Optional[bool] = None

    @field_validator("quantity", "is_purchased", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @model_validator(mode="after")
    def require_a_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class ShoppingListItemResponse(CamelModel):
    id: UUID
    shopping_list_id: UUID
    name: str
    quantity: float
    unit: Optional[str] = None
    is_purchased: bool


class ShoppingListResponse(CamelModel):
    id: UUID
    household_id: UUID
    created_at: datetime
    items: List[ShoppingListItemResponse]


class ShoppingListItemsCreatedResponse(CamelModel):
    items: List[ShoppingListItemResponse]


class ShoppingListItemListResponse(CamelModel):
    data: List[ShoppingListItemResponse]


class ShoppingListItemUpdateResponse(CamelModel):
    item: ShoppingListItemResponse
    pantry_item: Optional[PantryItemResponse] = None


class BulkPurchaseRequest(CamelModel):
    item_ids: List[UUID] = Field(
        ..., min_length=1, max_length=AppConstants.MAX_ITEMS_PER_BATCH
    )


class BulkDeleteRequest(CamelModel):
    item_ids: List[UUID] = Field(
        ..., min_length=1, max_length=AppConstants.MAX_BULK_DELETE_ITEMS
    )


class TransferredItem(CamelModel):
    item_id: UUID
    pantry_item_id: UUID


class BulkPurchaseResponse(CamelModel):
    purchased: List[UUID]
    transferred: List[TransferredItem]
    failed: List[BulkItemFailure]
    summary: BulkSummary


class BulkDeleteResponse(CamelModel):
    deleted: List[UUID]
    failed: List[BulkItemFailure]
    summary: BulkSummary
