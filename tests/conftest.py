"""
Shared fixtures for repository unit tests.

Data clients are replaced with ``AsyncMock`` stubs; nothing here touches a
real data source.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from data_repository.core.events import BroadcastConfig, EntityUpdateBroadcaster
from data_repository.models.schemas import PaginatedResponse, ResponseMetadata, SuccessApiResponse
from data_repository.repositories.data_repository import DataRepository
from tests.utils.testdata import Item


@pytest.fixture
def metadata() -> ResponseMetadata:
    return ResponseMetadata(request_id="test-req-id", timestamp=datetime.now(timezone.utc))


@pytest.fixture
def item() -> Item:
    return Item(id="test-id-123", value="Test Item")


@pytest.fixture
def make_response(metadata):
    """Wrap a payload in a success envelope."""

    def _make(data):
        return SuccessApiResponse(data=data, metadata=metadata)

    return _make


@pytest.fixture
def paginated_items() -> PaginatedResponse:
    return PaginatedResponse(
        items=[Item(id="id1", value="Item 1"), Item(id="id2", value="Item 2")],
        cursor=None,
        has_more=False,
    )


@pytest.fixture
def mock_data_client() -> AsyncMock:
    """Stub data client; every operation is an awaitable mock."""
    return AsyncMock()


@pytest.fixture
def broadcaster() -> EntityUpdateBroadcaster:
    return EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))


@pytest.fixture
def repository(mock_data_client):
    repo = DataRepository[Item](data_client=mock_data_client)
    yield repo
    repo.dispose()
