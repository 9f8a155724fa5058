from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model for API payloads; JSON uses camelCase, Python uses snake_case"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body returned for every non-2xx response"""

    error: str
    message: str
    details: Optional[List[ErrorDetail]] = None


class BulkSummary(CamelModel):
    total: int
    successful: int
    failed: int


class PaginationInfo(CamelModel):
    page: int
    page_size: int
    total: int


class BulkItemFailure(CamelModel):
    item_id: UUID
    reason: str


class BulkIdFailure(CamelModel):
    id: UUID
    reason: str


def build_summary(total: int, successful: int) -> BulkSummary:
    return BulkSummary(total=total, successful=successful, failed=total - successful)
