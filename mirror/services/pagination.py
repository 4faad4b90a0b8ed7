"""Paginated windows over a dynamic item list."""
import logging
from typing import Callable, Generic, List, Optional, Sequence, TypeVar
from backend.client import BackendError
from mirror.models import ITEMS_PER_PAGE_OPTIONS, DEFAULT_ITEMS_PER_PAGE
from mirror.services.preferences import PreferenceService
from shared.config import settings
from shared.utils import ceil_div

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Paginator(Generic[T]):
    """
    Windowed view over a caller-supplied source.

    The source is read on every access, so the window always reflects the
    current list. Bounds are not corrected automatically; call
    `check_page_bounds` after the source may have shrunk.
    """

    items_per_page_options = ITEMS_PER_PAGE_OPTIONS

    def __init__(
        self,
        source: Callable[[], Sequence[T]],
        items_per_page: Optional[int] = None,
        preference_service: Optional[PreferenceService] = None
    ):
        self.source = source
        self.preference_service = preference_service
        self.current_page = 1
        if items_per_page is None:
            items_per_page = settings.default_items_per_page
        if items_per_page not in ITEMS_PER_PAGE_OPTIONS:
            items_per_page = DEFAULT_ITEMS_PER_PAGE
        self.items_per_page = items_per_page

    @property
    def total_items(self) -> int:
        return len(self.source())

    @property
    def total_pages(self) -> int:
        return ceil_div(self.total_items, self.items_per_page)

    @property
    def paginated_items(self) -> List[T]:
        start = (self.current_page - 1) * self.items_per_page
        return list(self.source()[start:start + self.items_per_page])

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    def go_to_page(self, page: int) -> bool:
        """Move to a page. Pages outside [1, total_pages] are ignored."""
        if 1 <= page <= self.total_pages:
            self.current_page = page
            return True
        return False

    def next_page(self) -> bool:
        if self.has_next_page:
            return self.go_to_page(self.current_page + 1)
        return False

    def previous_page(self) -> bool:
        if self.has_previous_page:
            return self.go_to_page(self.current_page - 1)
        return False

    def reset_page(self):
        self.current_page = 1

    def check_page_bounds(self):
        """Clamp the current page back into range after the source changed."""
        total_pages = self.total_pages
        if total_pages == 0:
            self.current_page = 1
        elif self.current_page > total_pages:
            self.current_page = total_pages
        elif self.current_page < 1:
            self.current_page = 1

    async def set_items_per_page(self, value: int) -> bool:
        """
        Change the page size and go back to page 1.

        Values outside the option set are rejected without any change, and
        the current size is a no-op. The new size is persisted through the
        preference service when one is attached; a persistence failure is
        logged and the change is kept in both the paginator and the
        preference cache.
        """
        if value not in ITEMS_PER_PAGE_OPTIONS:
            logger.debug(f"Rejected items per page {value}")
            return False

        if value == self.items_per_page:
            return True

        self.items_per_page = value
        self.reset_page()

        if self.preference_service is not None:
            try:
                await self.preference_service.set_items_per_page(value)
            except BackendError as e:
                logger.error(f"Failed to save items per page preference: {e}")
                self.preference_service.cache_items_per_page(value)
        return True

    async def load_preference(self) -> int:
        """Apply the stored page size, if it is a valid option."""
        if self.preference_service is None:
            return self.items_per_page

        value = await self.preference_service.load_items_per_page()
        if value is not None and value != self.items_per_page:
            self.items_per_page = value
            self.reset_page()
        return self.items_per_page
