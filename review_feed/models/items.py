"""Display items shown in the review list."""

from typing import Union
from uuid import UUID, uuid4

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from review_feed.models.typography import StyledText


class ReviewDisplayItem(BaseModel):
    """
    A review row ready for layout and rendering.

    Items are immutable; updates produce a copy with the same ``id`` so
    consumers can diff successive snapshots by identity.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: UUID = Field(default_factory=uuid4)
    first_name: StyledText
    last_name: StyledText
    rating: int
    review_text: StyledText
    created: StyledText

    avatar_url: str | None = None
    photo_urls: tuple[str, ...] = ()

    avatar_image: Image.Image | None = None
    photos: tuple[Image.Image, ...] | None = None

    max_lines: int = Field(default=3, ge=0, description="0 means unlimited")

    @property
    def full_name(self) -> StyledText:
        """First and last name joined with a space, in the first name's style."""
        return StyledText(
            text=f"{self.first_name.text} {self.last_name.text}",
            style=self.first_name.style,
        )

    @property
    def is_expanded(self) -> bool:
        return self.max_lines == 0

    @property
    def photo_count(self) -> int:
        return len(self.photos) if self.photos else 0


class ReviewCountItem(BaseModel):
    """Summary row with the total number of reviews, always last in the list."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    count: int
    text: StyledText


ListItem = Union[ReviewDisplayItem, ReviewCountItem]
