"""Item model definitions."""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, field_validator
from shared.utils import parse_json_list


class ItemState(str, Enum):
    """Item lifecycle state."""
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"
    DELETED = "deleted"


class ContentStatus(str, Enum):
    """Progress of the backend extraction pipeline for an item."""
    NONE = "none"
    FETCHING = "fetching"
    EXTRACTED = "extracted"
    FAILED = "failed"
    SKIPPED = "skipped"


class ContentCompleteness(str, Enum):
    """Whether the feed-supplied content is already complete."""
    UNKNOWN = "unknown"
    PARTIAL = "partial"
    FULL = "full"


class Item(BaseModel):
    """Feed, issue or notification entry as mirrored from the backend."""
    id: int
    source_id: Optional[int] = None
    external_id: Optional[str] = None
    title: str = ""
    summary: Optional[str] = None
    url: Optional[str] = None
    item_type: Optional[str] = None
    state: ItemState = ItemState.UNREAD
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    image_url: Optional[str] = None
    content_html: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None  # JSON array string
    comments: Optional[str] = None
    source_name: Optional[str] = None
    source_group: Optional[str] = None
    content_status: Optional[ContentStatus] = None
    extracted_content_html: Optional[str] = None
    content_completeness: Optional[ContentCompleteness] = None
    extraction_attempted_at: Optional[int] = None
    extraction_failed_reason: Optional[str] = None

    @field_validator("content_status", "content_completeness", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        """Treat empty strings from the backend as absent values."""
        return v or None

    @property
    def categories(self) -> List[str]:
        """Categories decoded from the JSON array in `category`."""
        return [str(c) for c in parse_json_list(self.category)]

    @property
    def feed_content(self) -> str:
        """Feed-supplied body: content_html, else summary, else empty."""
        return self.content_html or self.summary or ""

    @property
    def has_extracted_content(self) -> bool:
        """True only for a completed extraction with a non-empty body."""
        return self.content_status == ContentStatus.EXTRACTED and bool(self.extracted_content_html)

    @property
    def extraction_untried(self) -> bool:
        """True when the backend has recorded no extraction status yet."""
        return self.content_status in (None, ContentStatus.NONE)
