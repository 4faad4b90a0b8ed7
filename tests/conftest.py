"""Pytest configuration and fixtures."""
import pytest
from unittest.mock import MagicMock, AsyncMock
from mirror.models import Item


@pytest.fixture
def make_item():
    """Factory for Item models with sensible defaults."""
    def _make(item_id: int = 1, **fields) -> Item:
        data = {
            "id": item_id,
            "source_id": 1,
            "external_id": f"ext-{item_id}",
            "title": f"Item {item_id}",
            "url": f"https://example.com/items/{item_id}",
            "item_type": "post",
            "state": "unread",
            "created_at": 1707041400,
            "updated_at": 1707041400,
        }
        data.update(fields)
        return Item(**data)
    return _make


@pytest.fixture
def mock_item_repo():
    """Create mock item repository."""
    repo = MagicMock()
    repo.get_items = AsyncMock(return_value=[])
    repo.get_item = AsyncMock(return_value=None)
    repo.update_item_state = AsyncMock(return_value=None)
    repo.bulk_update_item_state = AsyncMock(return_value=None)
    repo.trigger_extraction = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_preference_repo():
    """Create mock preference repository backed by a dict."""
    store = {}
    repo = MagicMock()
    repo.store = store

    async def _get(key):
        return store.get(key)

    async def _set(key, value):
        store[key] = value

    repo.get = AsyncMock(side_effect=_get)
    repo.set = AsyncMock(side_effect=_set)
    return repo


@pytest.fixture
def sample_item_row():
    """Item as returned by the backend get_items command."""
    return {
        "id": 42,
        "source_id": 3,
        "external_id": "https://example.com/feed#42",
        "title": "Test Article Title",
        "summary": "Short summary",
        "url": "https://example.com/test-article",
        "item_type": "post",
        "state": "unread",
        "created_at": 1707041400,
        "updated_at": 1707041520,
        "content_html": "<p>Feed body</p>",
        "category": "[\"Technology\", \"AI\"]",
        "source_name": "TestSource",
        "source_group": "News, Tech",
        "content_status": "extracted",
        "extracted_content_html": "<article>Full body</article>",
        "content_completeness": "partial",
        "extraction_attempted_at": 1707041500
    }
