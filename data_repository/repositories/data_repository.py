"""Generic repository delegating CRUD, query and aggregation calls to a data client."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar, get_args, get_origin

from data_repository.clients.data_client import DataClient
from data_repository.config.settings import settings
from data_repository.core.errors import DataFormatError, HttpException, error_family
from data_repository.core.events import EntityUpdateBroadcaster
from data_repository.core.metrics import (
    ENTITY_UPDATES_PUBLISHED,
    REPOSITORY_OPERATION_DURATION,
    REPOSITORY_OPERATIONS_TOTAL,
)
from data_repository.models.schemas import PaginatedResponse, PaginationOptions, SortOption

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _type_argument(alias: Any) -> Optional[type]:
    args = get_args(alias)
    if args and isinstance(args[0], type):
        return args[0]
    return None


class DataRepository(Generic[T]):
    """Abstraction layer over a :class:`DataClient` for items of type ``T``.

    Every operation delegates to the client, unwraps the
    :class:`SuccessApiResponse` and returns its payload. ``HttpException``
    and ``DataFormatError`` raised by the client are re-raised unchanged so
    callers can branch on the exact error type.

    After a successful create, update or delete the item type is published on
    :attr:`entity_updated`::

        repository = DataRepository[Headline](data_client=client)
        async with repository.entity_updated.subscribe(Headline) as updates:
            async for _ in updates:
                await refresh_headlines()
    """

    def __init__(
        self,
        *,
        data_client: DataClient[T],
        item_type: Optional[type] = None,
        broadcaster: Optional[EntityUpdateBroadcaster] = None,
    ) -> None:
        self._data_client = data_client
        self._item_type = item_type
        # An injected broadcaster may be shared; only one created here is closed on dispose
        self._owns_broadcaster = broadcaster is None
        self._entity_updated = broadcaster if broadcaster is not None else EntityUpdateBroadcaster()

    @property
    def item_type(self) -> type:
        """The type announced on :attr:`entity_updated`.

        Explicit ``item_type`` wins, then the subscripted parameter of
        ``DataRepository[X](...)``, then the parameter of a
        ``class XRepository(DataRepository[X])`` base, then ``object``.
        """
        if self._item_type is not None:
            return self._item_type
        orig_class = getattr(self, "__orig_class__", None)
        if orig_class is not None:
            resolved = _type_argument(orig_class)
            if resolved is not None:
                return resolved
        for klass in type(self).__mro__:
            for base in getattr(klass, "__orig_bases__", ()):
                if isinstance(get_origin(base), type) and issubclass(get_origin(base), DataRepository):
                    resolved = _type_argument(base)
                    if resolved is not None:
                        return resolved
        return object

    @property
    def entity_updated(self) -> EntityUpdateBroadcaster:
        """Channel emitting :attr:`item_type` whenever an item is created, updated or deleted."""
        return self._entity_updated

    def dispose(self) -> None:
        """Close the notification channel; current subscribers see end of stream.

        A broadcaster passed in by the caller is left open, since other
        repositories may publish on it; its owner closes it.
        """
        if self._owns_broadcaster:
            self._entity_updated.close()

    async def __aenter__(self) -> "DataRepository[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"DataRepository[{self.item_type.__name__}]({self._data_client!r})"

    # --- Operations ---

    async def create(self, *, item: T, user_id: Optional[str] = None) -> T:
        """Create ``item`` and return the created item as stored by the data source."""
        with self._observe("create"):
            try:
                response = await self._data_client.create(item=item, user_id=user_id)
                created = response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("create", exc)
                raise
        self._notify_updated()
        return created

    async def read(self, *, id: str, user_id: Optional[str] = None) -> T:
        """Return the item with the given ``id``.

        A missing item surfaces as the client's ``NotFoundException``.
        """
        with self._observe("read"):
            try:
                response = await self._data_client.read(id=id, user_id=user_id)
                return response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("read", exc)
                raise

    async def read_all(
        self,
        *,
        user_id: Optional[str] = None,
        filter: Optional[Dict[str, Any]] = None,
        pagination: Optional[PaginationOptions] = None,
        sort: Optional[List[SortOption]] = None,
    ) -> PaginatedResponse[T]:
        """Return one page of items matching ``filter``, ordered by ``sort``."""
        with self._observe("read_all"):
            try:
                response = await self._data_client.read_all(
                    user_id=user_id,
                    filter=filter,
                    pagination=pagination,
                    sort=sort,
                )
                return response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("read_all", exc)
                raise

    async def update(self, *, id: str, item: T, user_id: Optional[str] = None) -> T:
        """Replace the item with the given ``id`` and return the updated item."""
        with self._observe("update"):
            try:
                response = await self._data_client.update(id=id, item=item, user_id=user_id)
                updated = response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("update", exc)
                raise
        self._notify_updated()
        return updated

    async def delete(self, *, id: str, user_id: Optional[str] = None) -> None:
        with self._observe("delete"):
            try:
                await self._data_client.delete(id=id, user_id=user_id)
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("delete", exc)
                raise
        self._notify_updated()

    async def count(self, *, user_id: Optional[str] = None, filter: Optional[Dict[str, Any]] = None) -> int:
        with self._observe("count"):
            try:
                response = await self._data_client.count(user_id=user_id, filter=filter)
                return response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("count", exc)
                raise

    async def aggregate(
        self,
        *,
        pipeline: List[Dict[str, Any]],
        user_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Run an aggregation ``pipeline`` on the data source and return the result documents."""
        with self._observe("aggregate"):
            try:
                response = await self._data_client.aggregate(pipeline=pipeline, user_id=user_id)
                return response.unwrap()
            except (HttpException, DataFormatError) as exc:
                self._log_client_error("aggregate", exc)
                raise

    # --- Helpers ---

    def _notify_updated(self) -> None:
        if self._entity_updated.is_closed:
            logger.debug("Skipping %s update; notification channel is closed", self.item_type.__name__)
            return
        item_type = self.item_type
        self._entity_updated.publish(item_type)
        if settings.METRICS_ENABLED:
            ENTITY_UPDATES_PUBLISHED.labels(item_type=item_type.__name__).inc()

    def _log_client_error(self, operation: str, error: Exception) -> None:
        family = error_family(error)
        logger.warning(
            "%s.%s failed with %s: %s",
            self.item_type.__name__,
            operation,
            type(error).__name__,
            error,
            extra={
                "operation": operation,
                "item_type": self.item_type.__name__,
                "error_family": family.value if family else None,
            },
        )

    @contextmanager
    def _observe(self, operation: str) -> Iterator[None]:
        item_type = self.item_type.__name__
        logger.debug("%s.%s started", item_type, operation, extra={"operation": operation, "item_type": item_type})
        start_time = time.perf_counter()
        outcome = "success"
        try:
            yield
        except BaseException as exc:
            family = error_family(exc)
            outcome = f"{family.value}_error" if family else "error"
            raise
        finally:
            duration = time.perf_counter() - start_time
            if settings.METRICS_ENABLED:
                REPOSITORY_OPERATION_DURATION.labels(item_type=item_type, operation=operation).observe(duration)
                REPOSITORY_OPERATIONS_TOTAL.labels(item_type=item_type, operation=operation, outcome=outcome).inc()
            logger.debug(
                "%s.%s finished in %.4fs (%s)",
                item_type,
                operation,
                duration,
                outcome,
                extra={"operation": operation, "item_type": item_type},
            )
