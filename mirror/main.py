"""One-shot sync entry point."""
import asyncio
import logging
from mirror.models import ItemState
from mirror.session import MirrorSession
from shared.config import settings

logger = logging.getLogger(__name__)


async def main():
    """Fetch unread items once and log the first page."""
    async with MirrorSession() as session:
        result = await session.items.fetch(state_filter=ItemState.UNREAD.value)
        if not result.success:
            logger.error(f"Sync failed: {result.error}")
            return

        paginator = session.paginate()
        logger.info(
            f"{paginator.total_items} unread items, "
            f"{paginator.total_pages} pages of {paginator.items_per_page}"
        )
        for item in paginator.paginated_items:
            resolution = session.content.display_content(item)
            logger.info(f"[{item.id}] {item.title} ({resolution.source.value})")

        await session.extraction.wait_pending()


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())
