"""Conversion of wire records into list items."""

from config.settings import settings
from review_feed.models.items import ReviewCountItem, ReviewDisplayItem
from review_feed.models.review import ReviewRecord
from review_feed.models.typography import CREATED, REVIEW_COUNT, TEXT, USERNAME, styled


def review_word(count: int) -> str:
    """
    Russian noun form for *count* reviews, chosen by the last digit only.

    1 -> "отзыв", 2-4 -> "отзыва", anything else -> "отзывов". Teens are
    not special-cased, so 11 -> "отзыв" and 12 -> "отзыва".
    """
    last_digit = count % 10
    if last_digit == 1:
        return "отзыв"
    if 2 <= last_digit <= 4:
        return "отзыва"
    return "отзывов"


class ItemBuilder:
    """Builds display items; has no side effects."""

    def __init__(self, default_max_lines: int | None = None):
        self.default_max_lines = settings.default_max_lines if default_max_lines is None else default_max_lines

    def make_review_item(self, record: ReviewRecord) -> ReviewDisplayItem:
        """Create a display item with no avatar or photos loaded yet."""
        return ReviewDisplayItem(
            first_name=styled(record.first_name, USERNAME),
            last_name=styled(record.last_name, USERNAME),
            rating=record.rating,
            review_text=styled(record.text, TEXT),
            created=styled(record.created, CREATED),
            avatar_url=record.avatar_url,
            photo_urls=tuple(record.photo_urls or ()),
            max_lines=self.default_max_lines,
        )

    def make_review_items(self, records: list[ReviewRecord]) -> list[ReviewDisplayItem]:
        return [self.make_review_item(record) for record in records]

    def make_count_item(self, count: int) -> ReviewCountItem:
        """Create the summary row, e.g. "24 отзыва"."""
        return ReviewCountItem(
            count=count,
            text=styled(f"{count} {review_word(count)}", REVIEW_COUNT),
        )
