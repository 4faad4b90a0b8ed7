"""Preference repository for backend preference commands."""
from typing import Optional
from backend.client import BackendClient


class PreferenceKey:
    """Persisted preference keys."""
    ARTICLE_VIEW_MODE = "article_view_mode"
    EXTRACTION_ENABLED = "extraction_enabled"
    ITEMS_PER_PAGE = "items_per_page"


class PreferenceRepository:
    """Repository for scalar user preferences."""

    def __init__(self, client: BackendClient):
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        """Get a stored preference value, or None if unset."""
        value = await self.client.invoke("get_user_preference", key=key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        """Store a preference value."""
        await self.client.invoke("set_user_preference", key=key, value=value)
