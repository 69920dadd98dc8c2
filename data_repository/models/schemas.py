"""
Response envelope, pagination and sorting models exchanged with data clients
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class ResponseMetadata(BaseModel):
    """Metadata attached to every successful client response"""

    request_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SuccessApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping the payload of a successful client call"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: T
    metadata: ResponseMetadata

    def unwrap(self) -> T:
        return self.data


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items plus the cursor needed to fetch the next one"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: List[T]
    cursor: Optional[str] = None
    has_more: bool = False


class PaginationOptions(BaseModel):
    """Cursor based pagination request"""

    model_config = ConfigDict(frozen=True)

    cursor: Optional[str] = None
    limit: Optional[int] = Field(default=None, gt=0)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOption(BaseModel):
    """A single (field, direction) pair of a sort specification"""

    model_config = ConfigDict(frozen=True)

    field: str
    order: SortOrder = SortOrder.ASC
