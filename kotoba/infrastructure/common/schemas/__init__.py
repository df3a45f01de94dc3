"""Common infrastructure schemas."""

from kotoba.infrastructure.common.schemas.response_wrappers import (
    MAX_ID,
    ApiModel,
    ErrorResponse,
    PaginatedResponse,
    PaginationMeta,
    PositiveId,
    SuccessResponse,
    Timestamp,
)

__all__ = [
    "MAX_ID",
    "ApiModel",
    "ErrorResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "PositiveId",
    "SuccessResponse",
    "Timestamp",
]
