"""
Envelope, pagination and sorting models
"""

from .schemas import (
    PaginatedResponse,
    PaginationOptions,
    ResponseMetadata,
    SortOption,
    SortOrder,
    SuccessApiResponse,
)

__all__ = [
    "PaginatedResponse",
    "PaginationOptions",
    "ResponseMetadata",
    "SortOption",
    "SortOrder",
    "SuccessApiResponse",
]
