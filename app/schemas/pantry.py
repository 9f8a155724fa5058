from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from uuid import UUID
from .common import CamelModel
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class PantryItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=AppConstants.MAX_ITEM_NAME_LENGTH)
    quantity: float = Field(1, gt=0)
    unit: Optional[str] = Field(None, max_length=AppConstants.MAX_UNIT_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return ValidationHelpers.normalize_name(v) if isinstance(v, str) else v


class AddPantryItemsRequest(CamelModel):
    items: List[PantryItemCreate] = Field(
        ..., min_length=1, max_length=AppConstants.MAX_ITEMS_PER_BATCH
    )


class PantryItemUpdate(CamelModel):
    quantity: Optional[float] = Field(None, gt=0)
    unit: Optional[str] = Field(None, max_length=AppConstants.MAX_UNIT_LENGTH)

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_null_quantity(cls, v):
        if v is None:
            raise ValueError("quantity cannot be null")
        return v

    @model_validator(mode="after")
    def require_a_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class PantryItemResponse(CamelModel):
    id: UUID
    pantry_id: UUID
    name: str
    quantity: float
    unit: Optional[str] = None


class PantryResponse(CamelModel):
    id: UUID
    household_id: UUID
    items: List[PantryItemResponse]


class PantryItemsCreatedResponse(CamelModel):
    items: List[PantryItemResponse]


class PantryItemListResponse(CamelModel):
    data: List[PantryItemResponse]
