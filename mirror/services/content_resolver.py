"""Content resolution: which body to display for an item."""
import logging
from typing import Optional
from mirror.models import Item, Preferences, ArticleViewMode, ContentStatus
from mirror.schemas import ContentResolution, ContentSource, TriggerExtraction
from mirror.services.extraction import ExtractionTrigger
from mirror.services.preferences import PreferenceService

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTION_ERROR = "Failed to extract content"


def _feed(item: Item, **kwargs) -> ContentResolution:
    return ContentResolution(content=item.feed_content, source=ContentSource.FEED, **kwargs)


def _extraction_progress(item: Item) -> Optional[ContentResolution]:
    """Checks shared by auto and always_fetch: extracted, fetching, failed."""
    if item.has_extracted_content:
        return ContentResolution(
            content=item.extracted_content_html or "",
            source=ContentSource.EXTRACTED
        )

    if item.content_status == ContentStatus.FETCHING:
        return _feed(item, is_fetching=True)

    if item.content_status == ContentStatus.FAILED:
        return _feed(
            item,
            has_error=True,
            error_message=item.extraction_failed_reason or DEFAULT_EXTRACTION_ERROR
        )

    return None


def resolve(item: Optional[Item], prefs: Preferences) -> ContentResolution:
    """
    Decide which content variant to render for an item.

    Rules are applied in strict priority order:
    null item, extraction disabled, feed_only, then the extraction state
    checks for always_fetch and auto. Only always_fetch on an item with no
    recorded extraction status and a URL recommends a TriggerExtraction
    action; the caller decides whether to execute it. Never raises.
    """
    if item is None:
        return ContentResolution()

    if not prefs.extraction_enabled:
        return _feed(item)

    if prefs.article_view_mode == ArticleViewMode.FEED_ONLY:
        return _feed(item)

    progress = _extraction_progress(item)
    if progress is not None:
        return progress

    if prefs.article_view_mode == ArticleViewMode.ALWAYS_FETCH:
        if item.extraction_untried and item.url:
            return _feed(item, action=TriggerExtraction(item_id=item.id))
        return _feed(item)

    # Auto mode: full or partial, the feed body is shown. Extraction of partial
    # content is scheduled by the backend, not from here.
    return _feed(item)


class ContentService:
    """Resolves display content with cached preferences and runs follow-ups."""

    def __init__(self, preference_service: PreferenceService, extraction: ExtractionTrigger):
        self.preference_service = preference_service
        self.extraction = extraction

    def display_content(self, item: Optional[Item]) -> ContentResolution:
        """Resolve content for an item, scheduling extraction when recommended."""
        resolution = resolve(item, self.preference_service.preferences)
        if resolution.action is not None:
            logger.debug(f"Extraction recommended for item {resolution.action.item_id}")
            self.extraction.execute(resolution.action)
        return resolution
