# Models module
from .item import Item, ItemState, ContentStatus, ContentCompleteness
from .preferences import (
    Preferences,
    ArticleViewMode,
    ITEMS_PER_PAGE_OPTIONS,
    DEFAULT_ITEMS_PER_PAGE
)

__all__ = [
    "Item",
    "ItemState",
    "ContentStatus",
    "ContentCompleteness",
    "Preferences",
    "ArticleViewMode",
    "ITEMS_PER_PAGE_OPTIONS",
    "DEFAULT_ITEMS_PER_PAGE"
]
