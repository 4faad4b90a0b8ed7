"""Item repository for backend item commands."""
from typing import Optional, List, Any
from backend.client import BackendClient
from mirror.models import Item, ItemState


class ItemRepository:
    """Repository for item reads and state transitions."""

    def __init__(self, client: BackendClient):
        self.client = client

    async def get_items(
        self,
        state_filter: Optional[str] = None,
        group_filter: Optional[str] = None,
        source_ids: Optional[List[int]] = None,
        group_names: Optional[List[str]] = None
    ) -> List[Item]:
        """Get the filtered item list, in backend order."""
        rows = await self.client.invoke(
            "get_items",
            state_filter=state_filter,
            group_filter=group_filter,
            source_ids=source_ids or None,
            group_names=group_names or None
        )
        return [Item.model_validate(row) for row in rows or []]

    async def get_item(self, item_id: int) -> Optional[Item]:
        """Get a single item by ID."""
        row = await self.client.invoke("get_item", id=item_id)
        return Item.model_validate(row) if row else None

    async def update_item_state(self, item_id: int, state: ItemState) -> None:
        """Request a state transition for one item."""
        await self.client.invoke("update_item_state", id=item_id, state=_state_value(state))

    async def bulk_update_item_state(self, item_ids: List[int], state: ItemState) -> None:
        """Request a single batch state transition."""
        await self.client.invoke(
            "bulk_update_item_state",
            ids=list(item_ids),
            state=_state_value(state)
        )

    async def trigger_extraction(self, item_id: int) -> None:
        """Ask the backend to start content extraction for an item."""
        await self.client.invoke("trigger_extraction", item_id=item_id)


def _state_value(state: Any) -> str:
    return ItemState(state).value
