"""Preference service with a process-level cache."""
import logging
from typing import Optional
from backend.client import BackendError
from backend.repositories.preference_repo import PreferenceRepository, PreferenceKey
from mirror.models import Preferences, ArticleViewMode, ITEMS_PER_PAGE_OPTIONS

logger = logging.getLogger(__name__)


def parse_items_per_page(raw: Optional[str]) -> Optional[int]:
    """Parse a stored page size, returning None unless it is a valid option."""
    if not raw:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value in ITEMS_PER_PAGE_OPTIONS else None


class PreferenceService:
    """Loads preferences once and keeps them cached until changed."""

    def __init__(self, repo: PreferenceRepository):
        self.repo = repo
        self._preferences = Preferences()
        self._loaded = False

    @property
    def preferences(self) -> Preferences:
        """Current cached preferences (defaults until loaded)."""
        return self._preferences

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self, force: bool = False) -> Preferences:
        """
        Load preferences from the backend.

        Each key falls back to its default when missing, invalid or when the
        backend call fails. Failures are logged, never raised.
        """
        if self._loaded and not force:
            return self._preferences

        defaults = Preferences()

        mode = await self._read(PreferenceKey.ARTICLE_VIEW_MODE)
        try:
            article_view_mode = ArticleViewMode(mode) if mode else defaults.article_view_mode
        except ValueError:
            logger.warning(f"Unknown article view mode {mode!r}, using {defaults.article_view_mode.value}")
            article_view_mode = defaults.article_view_mode

        enabled = await self._read(PreferenceKey.EXTRACTION_ENABLED)
        extraction_enabled = enabled != "false"

        page_size = await self._read(PreferenceKey.ITEMS_PER_PAGE)
        items_per_page = parse_items_per_page(page_size) or defaults.items_per_page

        self._preferences = Preferences(
            article_view_mode=article_view_mode,
            extraction_enabled=extraction_enabled,
            items_per_page=items_per_page
        )
        self._loaded = True
        return self._preferences

    async def _read(self, key: str) -> Optional[str]:
        try:
            return await self.repo.get(key)
        except BackendError as e:
            logger.error(f"Failed to load preference {key}: {e}")
            return None

    async def set_article_view_mode(self, mode: ArticleViewMode) -> None:
        """Persist and cache the article view mode."""
        mode = ArticleViewMode(mode)
        await self.repo.set(PreferenceKey.ARTICLE_VIEW_MODE, mode.value)
        self._preferences = self._preferences.model_copy(update={"article_view_mode": mode})

    async def set_extraction_enabled(self, enabled: bool) -> None:
        """Persist and cache the extraction toggle."""
        await self.repo.set(PreferenceKey.EXTRACTION_ENABLED, "true" if enabled else "false")
        self._preferences = self._preferences.model_copy(update={"extraction_enabled": bool(enabled)})

    async def set_items_per_page(self, value: int) -> None:
        """Persist and cache the page size. Raises ValueError for unsupported sizes."""
        if value not in ITEMS_PER_PAGE_OPTIONS:
            raise ValueError(f"items_per_page must be one of {ITEMS_PER_PAGE_OPTIONS}")
        await self.repo.set(PreferenceKey.ITEMS_PER_PAGE, str(value))
        self._preferences = self._preferences.model_copy(update={"items_per_page": value})

    async def load_items_per_page(self) -> Optional[int]:
        """
        Read the stored page size into the cache.

        Returns None, leaving the cache alone, when the stored value is
        missing, invalid or the backend call fails.
        """
        value = parse_items_per_page(await self._read(PreferenceKey.ITEMS_PER_PAGE))
        if value is not None:
            self.cache_items_per_page(value)
        return value

    def cache_items_per_page(self, value: int) -> None:
        """Update the cached page size without persisting it."""
        if value not in ITEMS_PER_PAGE_OPTIONS:
            raise ValueError(f"items_per_page must be one of {ITEMS_PER_PAGE_OPTIONS}")
        self._preferences = self._preferences.model_copy(update={"items_per_page": value})
