"""Owned bundle of the mirror's services."""
import logging
from typing import Callable, Optional, Sequence, TypeVar
from backend.client import BackendClient
from backend.connection import BackendConnection
from backend.repositories.item_repo import ItemRepository
from backend.repositories.preference_repo import PreferenceRepository
from mirror.services.content_resolver import ContentService
from mirror.services.extraction import ExtractionTrigger
from mirror.services.item_cache import ItemCache
from mirror.services.pagination import Paginator
from mirror.services.preferences import PreferenceService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MirrorSession:
    """
    Builds and owns the item cache, preference cache and their backend.

    Consumers receive these objects from the session instead of reaching
    for module globals. Use as an async context manager, or call `start`
    and `close` explicitly.
    """

    def __init__(self, connection: Optional[BackendConnection] = None):
        self.connection = connection or BackendConnection()
        self.client = BackendClient(self.connection)
        self.item_repo = ItemRepository(self.client)
        self.preference_repo = PreferenceRepository(self.client)

        self.preferences = PreferenceService(self.preference_repo)
        self.extraction = ExtractionTrigger(self.item_repo)
        self.items = ItemCache(self.item_repo)
        self.content = ContentService(self.preferences, self.extraction)

    async def start(self) -> "MirrorSession":
        """Open the backend session and load preferences."""
        await self.connection.init()
        await self.preferences.load()
        logger.info(f"Mirror session started against {self.connection.base_url}")
        return self

    async def close(self):
        """Cancel pending triggers and close the backend session."""
        await self.extraction.close()
        await self.connection.close()
        self.items.clear()
        logger.info("Mirror session closed")

    async def __aenter__(self) -> "MirrorSession":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def paginate(self, source: Optional[Callable[[], Sequence[T]]] = None) -> Paginator:
        """Paginator over `source` (default: the cached items), sized from preferences."""
        if source is None:
            source = lambda: self.items.items
        return Paginator(
            source,
            items_per_page=self.preferences.preferences.items_per_page,
            preference_service=self.preferences
        )
