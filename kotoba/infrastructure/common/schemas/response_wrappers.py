"""Common response wrapper schemas for API responses."""

from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from kotoba.application.common.pagination import PaginatedResult
from kotoba.utils import format_timestamp

T = TypeVar("T")

# Datetime rendered as YYYY-MM-DDTHH:MM:SSZ
Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]

# Largest key a signed 64-bit INTEGER / BIGINT column can hold
MAX_ID = 2**63 - 1

# Database key supplied by a client
PositiveId = Annotated[int, Field(gt=0, le=MAX_ID)]


class ApiModel(BaseModel):
    """Base schema with camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationMeta(ApiModel):
    """Pagination block of list responses."""

    page: int
    limit: int
    total_pages: int
    total_items: int

    @classmethod
    def from_result(cls, result: PaginatedResult[Any]) -> "PaginationMeta":
        return cls(
            page=result.page,
            limit=result.page_size,
            total_pages=result.total_pages,
            total_items=result.total,
        )


class SuccessResponse(ApiModel, Generic[T]):
    """Generic success response wrapper."""

    status: Literal["success"] = "success"
    message: str
    data: T


class PaginatedResponse(ApiModel, Generic[T]):
    """Generic success response wrapper for one page of a list."""

    status: Literal["success"] = "success"
    message: str
    data: list[T]
    pagination: PaginationMeta


class ErrorResponse(ApiModel):
    """Body of every error response."""

    status: Literal["error"] = "error"
    message: str
    code: str = Field(..., description="Stable machine-readable error identifier")
    data: Any = None
