"""Content resolution schemas."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ContentSource(str, Enum):
    """Where the displayed body came from."""
    FEED = "feed"
    EXTRACTED = "extracted"


class TriggerExtraction(BaseModel):
    """Recommended action: ask the backend to extract an item's content."""
    item_id: int

    class Config:
        frozen = True


class ContentResolution(BaseModel):
    """Which body to display for an item, and why."""
    content: str = Field(default="", description="Body to render")
    source: ContentSource = Field(default=ContentSource.FEED)
    is_fetching: bool = Field(default=False, description="Extraction in progress")
    has_error: bool = Field(default=False, description="Extraction failed")
    error_message: Optional[str] = Field(None, description="Failure reason when has_error")
    action: Optional[TriggerExtraction] = Field(None, description="Follow-up the caller should execute")
