"""Data client contract consumed by :class:`DataRepository`.

Why Protocol:
- Any object exposing these coroutines can back a repository (HTTP client,
  database adapter, in-process fake) without inheriting from a base class.
- Tests substitute ``AsyncMock`` objects without extra wiring.

Every method either returns a :class:`SuccessApiResponse` (``delete``
returns nothing) or raises an ``HttpException`` or ``DataFormatError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, TypeVar, runtime_checkable

from data_repository.models.schemas import (
    PaginatedResponse,
    PaginationOptions,
    SortOption,
    SuccessApiResponse,
)

T = TypeVar("T")


@runtime_checkable
class DataClient(Protocol[T]):
    """CRUD, query and aggregation operations for items of type ``T``."""

    async def create(self, *, item: T, user_id: Optional[str] = None) -> SuccessApiResponse[T]:
        ...

    async def read(self, *, id: str, user_id: Optional[str] = None) -> SuccessApiResponse[T]:
        ...

    async def read_all(
        self,
        *,
        user_id: Optional[str] = None,
        filter: Optional[Dict[str, Any]] = None,
        pagination: Optional[PaginationOptions] = None,
        sort: Optional[List[SortOption]] = None,
    ) -> SuccessApiResponse[PaginatedResponse[T]]:
        ...

    async def update(self, *, id: str, item: T, user_id: Optional[str] = None) -> SuccessApiResponse[T]:
        ...

    async def delete(self, *, id: str, user_id: Optional[str] = None) -> None:
        ...

    async def count(
        self,
        *,
        user_id: Optional[str] = None,
        filter: Optional[Dict[str, Any]] = None,
    ) -> SuccessApiResponse[int]:
        ...

    async def aggregate(
        self,
        *,
        pipeline: List[Dict[str, Any]],
        user_id: Optional[str] = None,
    ) -> SuccessApiResponse[List[Dict[str, Any]]]:
        ...
