"""Executor for extraction-trigger actions."""
import asyncio
import logging
import time
from typing import Dict, Optional, Set
from backend.client import BackendError
from backend.repositories.item_repo import ItemRepository
from mirror.schemas import TriggerExtraction
from shared.config import settings

logger = logging.getLogger(__name__)


class ExtractionTrigger:
    """
    Fires extraction requests to the backend without blocking the caller.

    A trigger for an item is skipped while one is in flight or when the last
    one for that item was sent less than `cooldown` seconds ago, so repeated
    resolutions of the same item do not flood the backend.
    """

    def __init__(self, item_repo: ItemRepository, cooldown: Optional[float] = None):
        self.item_repo = item_repo
        self.cooldown = settings.extraction_trigger_cooldown if cooldown is None else cooldown
        self._last_triggered: Dict[int, float] = {}
        self._in_flight: Set[int] = set()
        self._tasks: Set[asyncio.Task] = set()

    def should_trigger(self, item_id: int) -> bool:
        """Whether a new trigger for this item would be sent."""
        self._prune()
        if item_id in self._in_flight:
            return False
        last = self._last_triggered.get(item_id)
        return last is None or time.monotonic() - last >= self.cooldown

    def execute(self, action: TriggerExtraction) -> Optional[asyncio.Task]:
        """Schedule the trigger request. Without a running event loop nothing is sent."""
        item_id = action.item_id
        if not self.should_trigger(item_id):
            logger.debug(f"Skipping extraction trigger for item {item_id}")
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(f"Cannot trigger extraction for item {item_id}: no running event loop")
            return None

        self._in_flight.add(item_id)
        self._last_triggered[item_id] = time.monotonic()

        task = loop.create_task(self._trigger(item_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _trigger(self, item_id: int):
        try:
            await self.item_repo.trigger_extraction(item_id)
            logger.info(f"Triggered extraction for item {item_id}")
        except BackendError as e:
            logger.error(f"Failed to trigger extraction for item {item_id}: {e}")
        finally:
            self._in_flight.discard(item_id)

    def _prune(self):
        """Drop cooldown records that have expired."""
        now = time.monotonic()
        expired = [i for i, last in self._last_triggered.items() if now - last >= self.cooldown]
        for item_id in expired:
            del self._last_triggered[item_id]

    def forget(self, item_id: int):
        """Drop the cooldown record for an item so it can be triggered again."""
        self._last_triggered.pop(item_id, None)

    async def wait_pending(self):
        """Wait for all scheduled triggers to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self):
        """Cancel outstanding triggers."""
        for task in list(self._tasks):
            task.cancel()
        await self.wait_pending()
        self._tasks.clear()
        self._in_flight.clear()
