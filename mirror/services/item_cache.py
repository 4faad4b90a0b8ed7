"""Item cache: the local mirror of the backend item collection."""
import asyncio
import logging
from typing import Optional, List, Iterable
from pydantic import ValidationError
from backend.client import BackendError
from backend.repositories.item_repo import ItemRepository
from mirror.models import Item, ItemState
from mirror.schemas import OperationResult

logger = logging.getLogger(__name__)


class ItemCache:
    """
    Mirror of the backend item collection.

    Local state only changes after the backend confirms a request. All
    mutating operations run one at a time under a single lock, so a fetch
    and a bulk update can no longer interleave their writes.
    """

    def __init__(self, item_repo: ItemRepository):
        self.item_repo = item_repo
        self._items: List[Item] = []
        self._loading = False
        self._error: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def items(self) -> List[Item]:
        """Snapshot of the cached items, in backend order."""
        return list(self._items)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        """Last recorded backend error, if any."""
        return self._error

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self._items if item.state == ItemState.UNREAD)

    def get(self, item_id: int) -> Optional[Item]:
        """Cached item by ID, without contacting the backend."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def clear(self):
        """Drop all cached items and the recorded error."""
        self._items = []
        self._error = None

    async def fetch(
        self,
        state_filter: Optional[str] = None,
        group_filter: Optional[str] = None,
        source_ids: Optional[List[int]] = None,
        group_names: Optional[List[str]] = None
    ) -> OperationResult:
        """
        Replace the whole collection with the backend's filtered result.

        On failure the previous collection is kept and the error recorded.
        """
        async with self._lock:
            self._loading = True
            self._error = None
            try:
                items = await self.item_repo.get_items(
                    state_filter=state_filter,
                    group_filter=group_filter,
                    source_ids=source_ids,
                    group_names=group_names
                )
            except (BackendError, ValidationError) as e:
                self._error = str(e)
                logger.error(f"Failed to fetch items: {e}")
                return OperationResult.failed(self._error)
            finally:
                self._loading = False

            self._items = items
            logger.debug(f"Fetched {len(items)} items")
            return OperationResult.confirmed(len(items))

    async def fetch_one(self, item_id: int) -> Optional[Item]:
        """Read-through lookup of a single item. Does not touch the cache."""
        try:
            return await self.item_repo.get_item(item_id)
        except (BackendError, ValidationError) as e:
            self._error = str(e)
            logger.error(f"Failed to fetch item {item_id}: {e}")
            return None

    async def update_state(self, item_id: int, new_state: ItemState) -> OperationResult:
        """
        Transition one item and reconcile after confirmation.

        A confirmed `deleted` transition removes the item from the cache.
        Errors are recorded and returned, never raised.
        """
        new_state = ItemState(new_state)
        async with self._lock:
            try:
                await self.item_repo.update_item_state(item_id, new_state)
            except BackendError as e:
                self._error = str(e)
                logger.error(f"Failed to update item {item_id} state: {e}")
                return OperationResult.failed(self._error)

            item = self.get(item_id)
            if item is None:
                return OperationResult.confirmed(0)

            item.state = new_state
            if new_state == ItemState.DELETED:
                self._items = [i for i in self._items if i.id != item_id]
            return OperationResult.confirmed(1)

    async def bulk_update_state(
        self,
        item_ids: Iterable[int],
        new_state: ItemState,
        viewing_deleted: Optional[bool] = None
    ) -> OperationResult:
        """
        Transition many items in one backend batch and reconcile.

        `viewing_deleted` says whether the cache currently holds the trash
        listing. When None it is inferred from the cache contents (see
        `infer_viewing_deleted`).

        Raises BackendError after recording it when the backend refuses the
        batch; the cache is left untouched in that case.
        """
        ids = list(item_ids)
        if not ids:
            return OperationResult.confirmed(0)

        new_state = ItemState(new_state)
        async with self._lock:
            try:
                await self.item_repo.bulk_update_item_state(ids, new_state)
            except BackendError as e:
                self._error = str(e)
                logger.error(f"Failed to bulk update {len(ids)} items: {e}")
                raise

            if viewing_deleted is None:
                viewing_deleted = self.infer_viewing_deleted()

            affected = self._reconcile_bulk(set(ids), new_state, viewing_deleted)
            logger.debug(
                f"Bulk update to {new_state.value} confirmed for {len(ids)} items, "
                f"{affected} cached, trash view: {viewing_deleted}"
            )
            return OperationResult.confirmed(affected)

    def infer_viewing_deleted(self) -> bool:
        """
        Guess whether the cache is a trash listing.

        True iff any cached item is deleted. Approximate: a view mixing
        deleted and live items counts as trash, and an empty view never does.
        """
        return any(item.state == ItemState.DELETED for item in self._items)

    def _reconcile_bulk(self, id_set: set, new_state: ItemState, viewing_deleted: bool) -> int:
        affected = 0
        kept: List[Item] = []

        for item in self._items:
            if item.id not in id_set:
                kept.append(item)
                continue

            affected += 1
            prior_state = item.state
            item.state = new_state

            if new_state == ItemState.DELETED:
                # Trash view keeps deleted items visible; other views drop them.
                if viewing_deleted:
                    kept.append(item)
            elif prior_state != ItemState.DELETED:
                kept.append(item)
            # Recovered out of deleted: leaves the trash listing.

        self._items = kept
        return affected
