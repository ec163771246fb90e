"""Immutable snapshot of the review list."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from review_feed.models.items import ListItem, ReviewCountItem, ReviewDisplayItem


class ListState(BaseModel):
    """
    Items plus pagination flags, as seen by consumers.

    Snapshots are frozen; every transition produces a new one.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[ListItem, ...] = ()
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1)
    should_load: bool = True
    has_error: bool = False

    def index_of(self, item_id: UUID) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    def find(self, item_id: UUID) -> ListItem | None:
        index = self.index_of(item_id)
        return None if index is None else self.items[index]

    @property
    def review_items(self) -> list[ReviewDisplayItem]:
        return [item for item in self.items if isinstance(item, ReviewDisplayItem)]

    @property
    def count_item(self) -> ReviewCountItem | None:
        if self.items and isinstance(self.items[-1], ReviewCountItem):
            return self.items[-1]
        return None
