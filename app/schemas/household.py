from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from .common import CamelModel
from ..models.enums import HouseholdRole
from ..utils.constants import AppConstants
from ..utils.validation import ValidationHelpers


class HouseholdBase(CamelModel):
    name: str = Field(
        ...,
        min_length=AppConstants.HOUSEHOLD_NAME_MIN_LENGTH,
        max_length=AppConstants.HOUSEHOLD_NAME_MAX_LENGTH,
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return ValidationHelpers.normalize_name(v) if isinstance(v, str) else v


class HouseholdCreate(HouseholdBase):
    pass


class HouseholdUpdate(HouseholdBase):
    pass


class HouseholdSummary(CamelModel):
    id: UUID
    name: str
    created_at: datetime
    member_count: int


class HouseholdListResponse(CamelModel):
    data: List[HouseholdSummary]
    owned_household_id: Optional[UUID] = None


class HouseholdMember(CamelModel):
    id: UUID
    email: str


class HouseholdDetail(CamelModel):
    id: UUID
    name: str
    created_at: datetime
    owner_id: UUID
    members: List[HouseholdMember]


class HouseholdMemberDetail(HouseholdMember):
    role: HouseholdRole
    joined_at: datetime


class HouseholdMembersResponse(CamelModel):
    data: List[HouseholdMemberDetail]
