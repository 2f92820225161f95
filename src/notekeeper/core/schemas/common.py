"""
Shared response schemas - envelope and pagination
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schemas exposed to clients use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationMeta(CamelModel):
    """Page information returned next to list results"""

    current_page: int
    page_limit: int
    total: int
    total_pages: int
    next_page: Optional[int] = None
    previous_page: Optional[int] = None


class ApiResponse(BaseModel):
    """Envelope every endpoint answers with."""

    success: bool = Field(description="Operation success status")
    message: str = Field(description="Human-readable message")
    code: int = Field(description="HTTP status code")
    data: Optional[Any] = Field(default=None, description="Response payload")
    meta: Optional[PaginationMeta] = Field(default=None, description="Pagination info")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Note fetched successfully",
                "code": 200,
                "data": {"id": "123e4567-e89b-12d3-a456-426614174000"},
            }
        }
    )
