"""Preference model definitions."""
from enum import Enum
from pydantic import BaseModel, Field, field_validator

ITEMS_PER_PAGE_OPTIONS = (10, 20, 50, 100)
DEFAULT_ITEMS_PER_PAGE = 10


class ArticleViewMode(str, Enum):
    """How article bodies are chosen for display."""
    AUTO = "auto"
    FEED_ONLY = "feed_only"
    ALWAYS_FETCH = "always_fetch"


class Preferences(BaseModel):
    """Process-wide display preferences."""
    article_view_mode: ArticleViewMode = ArticleViewMode.AUTO
    extraction_enabled: bool = True
    items_per_page: int = Field(default=DEFAULT_ITEMS_PER_PAGE)

    @field_validator("items_per_page")
    @classmethod
    def validate_items_per_page(cls, v: int) -> int:
        """Validate the page size against the fixed option set."""
        if v not in ITEMS_PER_PAGE_OPTIONS:
            raise ValueError(f"items_per_page must be one of {ITEMS_PER_PAGE_OPTIONS}")
        return v
