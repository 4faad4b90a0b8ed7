"""Preference service tests."""
import pytest
from unittest.mock import AsyncMock
from backend.client import BackendError
from mirror.models import ArticleViewMode
from mirror.services.preferences import PreferenceService, parse_items_per_page


class TestPreferenceService:
    """Tests for PreferenceService."""

    @pytest.fixture
    def service(self, mock_preference_repo):
        return PreferenceService(mock_preference_repo)

    @pytest.mark.asyncio
    async def test_load_defaults_when_unset(self, service):
        """Test missing keys give the documented defaults."""
        prefs = await service.load()
        assert prefs.article_view_mode == ArticleViewMode.AUTO
        assert prefs.extraction_enabled is True
        assert prefs.items_per_page == 10
        assert service.loaded

    @pytest.mark.asyncio
    async def test_load_stored_values(self, service, mock_preference_repo):
        """Test stored values are parsed."""
        mock_preference_repo.store.update({
            "article_view_mode": "always_fetch",
            "extraction_enabled": "false",
            "items_per_page": "50"
        })
        prefs = await service.load()
        assert prefs.article_view_mode == ArticleViewMode.ALWAYS_FETCH
        assert prefs.extraction_enabled is False
        assert prefs.items_per_page == 50

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stored", ["true", "0", "no", "FALSE"])
    async def test_only_false_sentinel_disables(self, service, mock_preference_repo, stored):
        """Test extraction stays enabled for anything but 'false'."""
        mock_preference_repo.store["extraction_enabled"] = stored
        prefs = await service.load()
        assert prefs.extraction_enabled is True

    @pytest.mark.asyncio
    async def test_unknown_mode_falls_back(self, service, mock_preference_repo):
        """Test unknown view modes fall back to auto."""
        mock_preference_repo.store["article_view_mode"] = "reader"
        prefs = await service.load()
        assert prefs.article_view_mode == ArticleViewMode.AUTO

    @pytest.mark.asyncio
    async def test_load_failure_falls_back(self, service, mock_preference_repo):
        """Test backend failures fall back to defaults without raising."""
        mock_preference_repo.get = AsyncMock(side_effect=BackendError("no database"))
        prefs = await service.load()
        assert prefs.article_view_mode == ArticleViewMode.AUTO
        assert prefs.extraction_enabled is True

    @pytest.mark.asyncio
    async def test_load_is_cached(self, service, mock_preference_repo):
        """Test preferences are loaded once unless forced."""
        await service.load()
        await service.load()
        assert mock_preference_repo.get.await_count == 3
        await service.load(force=True)
        assert mock_preference_repo.get.await_count == 6

    @pytest.mark.asyncio
    async def test_setters_persist_and_update_cache(self, service, mock_preference_repo):
        """Test setters write through and refresh the cache."""
        await service.set_article_view_mode(ArticleViewMode.FEED_ONLY)
        await service.set_extraction_enabled(False)
        await service.set_items_per_page(100)

        assert mock_preference_repo.store == {
            "article_view_mode": "feed_only",
            "extraction_enabled": "false",
            "items_per_page": "100"
        }
        assert service.preferences.article_view_mode == ArticleViewMode.FEED_ONLY
        assert service.preferences.extraction_enabled is False
        assert service.preferences.items_per_page == 100

    @pytest.mark.asyncio
    async def test_set_items_per_page_rejects_invalid(self, service, mock_preference_repo):
        """Test unsupported page sizes are refused before reaching the backend."""
        with pytest.raises(ValueError):
            await service.set_items_per_page(25)
        mock_preference_repo.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_setter_failure_keeps_cache(self, service, mock_preference_repo):
        """Test a failed save does not change the cached value."""
        mock_preference_repo.set = AsyncMock(side_effect=BackendError("read-only"))
        with pytest.raises(BackendError):
            await service.set_article_view_mode(ArticleViewMode.ALWAYS_FETCH)
        assert service.preferences.article_view_mode == ArticleViewMode.AUTO


class TestParseItemsPerPage:
    """Tests for parse_items_per_page."""

    @pytest.mark.parametrize("raw, expected", [
        ("10", 10), (" 20 ", 20), ("100", 100),
        ("25", None), ("ten", None), ("", None), (None, None)
    ])
    def test_parse(self, raw, expected):
        assert parse_items_per_page(raw) == expected


class TestItemsPerPageCache:
    """Tests for page size reads and cache-only updates."""

    @pytest.mark.asyncio
    async def test_load_items_per_page(self, mock_preference_repo):
        mock_preference_repo.store["items_per_page"] = "50"
        service = PreferenceService(mock_preference_repo)
        assert await service.load_items_per_page() == 50
        assert service.preferences.items_per_page == 50

    @pytest.mark.asyncio
    async def test_load_items_per_page_failure_keeps_cache(self, mock_preference_repo):
        mock_preference_repo.get = AsyncMock(side_effect=BackendError("unavailable"))
        service = PreferenceService(mock_preference_repo)
        service.cache_items_per_page(20)
        assert await service.load_items_per_page() is None
        assert service.preferences.items_per_page == 20

    def test_cache_items_per_page_rejects_invalid(self, mock_preference_repo):
        service = PreferenceService(mock_preference_repo)
        with pytest.raises(ValueError):
            service.cache_items_per_page(25)
        mock_preference_repo.set.assert_not_called()
